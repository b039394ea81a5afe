import argparse
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, List, Optional, Sequence

from src_stereo_nccr.disparity.search_data import SearchParameters
from src_stereo_nccr.errors import UsageError, HelpRequested
from utils.logger_config import LOG_LEVELS, get_logger

logger = get_logger(__name__)

DEFAULTS = {
    "mindisp": 0,
    "numdisp": 64,
    "blocksize": 21,
}

# Keys a JSON config file may provide, with the type each must have
CONFIG_KEYS = {
    "left": str,
    "right": str,
    "mindisp": int,
    "numdisp": int,
    "blocksize": int,
    "save": str,
    "log_level": str,
}


class Config:
    """Option defaults loaded from a JSON file, readable as attributes."""

    def __init__(self, config_path: str):
        self.config_path = Path(config_path)
        self.config_data = self._load_config(self.config_path)
        self._validate_config()

    def _load_config(self, config_path: Path) -> Dict[str, Any]:
        try:
            with open(config_path, 'r', encoding='utf-8') as config_file:
                config_data = json.load(config_file)
        except OSError as e:
            raise UsageError(f"cannot read config file {config_path}: {e.strerror or e}")
        except json.JSONDecodeError as e:
            raise UsageError(f"invalid JSON in config file {config_path}: {e}")

        if not isinstance(config_data, dict):
            raise UsageError(f"config file {config_path} must contain a JSON object")
        return config_data

    def _validate_config(self) -> None:
        """Drop unknown keys and check the types of known ones."""
        for key in list(self.config_data):
            if key not in CONFIG_KEYS:
                logger.warning(f"Ignoring unknown key '{key}' in {self.config_path}")
                del self.config_data[key]

        for key, expected in CONFIG_KEYS.items():
            value = self.config_data.get(key)
            if value is None:
                continue
            if not isinstance(value, expected) or isinstance(value, bool):
                raise UsageError(f"config key '{key}' must be of type {expected.__name__}, got {value!r}")

        # Relative image paths are resolved against the config file location
        for key in ("left", "right", "save"):
            if self.config_data.get(key):
                path = Path(self.config_data[key])
                if not path.is_absolute():
                    self.config_data[key] = str(self.config_path.parent / path)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config_data.get(key, default)

    def __getattr__(self, name: str) -> Any:
        if name != "config_data" and name in self.config_data:
            return self.config_data[name]
        raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")


@dataclass(frozen=True)
class ProgramOptions:
    """Everything the command line resolves to."""

    left_image: Path
    right_image: Path
    search: SearchParameters
    log_level: str = "INFO"
    save_path: Optional[Path] = None
    show: bool = True


class _OptionParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors by raising instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def _unsigned_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid unsigned integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = _OptionParser(
        prog="stereo-nccr",
        description="Compute a disparity map from a rectified stereo pair "
                    "using NCCR block matching.",
        add_help=False,
    )
    program = parser.add_argument_group("Program options")
    program.add_argument("-m", "--mindisp", type=int, default=None,
                         help=f"minimum disparity (default: {DEFAULTS['mindisp']})")
    program.add_argument("-n", "--numdisp", type=_unsigned_int, default=None,
                         help=f"number of disparities (default: {DEFAULTS['numdisp']})")
    program.add_argument("-b", "--blocksize", type=_unsigned_int, default=None,
                         help=f"block size, must be an odd number (default: {DEFAULTS['blocksize']})")
    program.add_argument("-l", "--left", default=None, help="path to the left image")
    program.add_argument("-r", "--right", default=None, help="path to the right image")

    other = parser.add_argument_group("Other options")
    other.add_argument("-c", "--config", default=None,
                       help="JSON file with default values for the options above")
    other.add_argument("-s", "--save", default=None,
                       help="also write the colorized disparity map to this image file")
    other.add_argument("--no-show", action="store_true",
                       help="do not open the display window")
    other.add_argument("--log-level", default=None, type=str.upper, choices=LOG_LEVELS,
                       help="logging verbosity (default: INFO)")
    other.add_argument("-h", "--help", action="store_true", help="print help screen and exit")
    return parser


def _pick(name: str, cli_value: Any, config: Optional[Config]) -> Any:
    if cli_value is not None:
        return cli_value
    if config is not None and config.get(name) is not None:
        return config.get(name)
    return DEFAULTS.get(name)


def parse_program_options(argv: Sequence[str]) -> ProgramOptions:
    """
    Map command-line arguments to program options.

    Values given on the command line take precedence over those from
    ``--config``, which take precedence over the built-in defaults.

    Args:
        argv: Arguments without the program name

    Returns:
        ProgramOptions: Resolved options

    Raises:
        HelpRequested: If -h/--help was given
        UsageError: If arguments are malformed or required ones are missing
    """
    parser = build_parser()
    args = parser.parse_args(list(argv))

    if args.help:
        raise HelpRequested(parser.format_help())

    config = Config(args.config) if args.config else None

    left = _pick("left", args.left, config)
    right = _pick("right", args.right, config)
    missing: List[str] = []
    if not left:
        missing.append("-l/--left")
    if not right:
        missing.append("-r/--right")
    if missing:
        raise UsageError(f"the following arguments are required: {', '.join(missing)}")

    numdisp = _pick("numdisp", args.numdisp, config)
    blocksize = _pick("blocksize", args.blocksize, config)
    if numdisp < 0 or blocksize < 0:
        raise UsageError("numdisp and blocksize must not be negative")

    save = _pick("save", args.save, config)
    log_level = (_pick("log_level", args.log_level, config) or "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise UsageError(f"invalid log level: {log_level}")

    return ProgramOptions(
        left_image=Path(left),
        right_image=Path(right),
        search=SearchParameters(
            num_disparities=numdisp,
            min_disparity=_pick("mindisp", args.mindisp, config),
            block_size=blocksize,
        ),
        log_level=log_level,
        save_path=Path(save) if save else None,
        show=not args.no_show,
    )
