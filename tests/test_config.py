import json
from pathlib import Path

import pytest

from config.config import Config, ProgramOptions, parse_program_options
from src_stereo_nccr.disparity import SearchParameters
from src_stereo_nccr.errors import HelpRequested, UsageError


def test_defaults():
    options = parse_program_options(["--left", "l.png", "--right", "r.png"])
    assert isinstance(options, ProgramOptions)
    assert options.left_image == Path("l.png")
    assert options.right_image == Path("r.png")
    assert options.search == SearchParameters(num_disparities=64, min_disparity=0, block_size=21)
    assert options.log_level == "INFO"
    assert options.save_path is None
    assert options.show is True


def test_short_options():
    options = parse_program_options(["-l", "a.png", "-r", "b.png", "-m", "-8", "-n", "32", "-b", "9"])
    assert options.search == SearchParameters(num_disparities=32, min_disparity=-8, block_size=9)


def test_output_options():
    options = parse_program_options(["-l", "a.png", "-r", "b.png", "--save", "out/disp.png",
                                     "--no-show", "--log-level", "debug"])
    assert options.save_path == Path("out/disp.png")
    assert options.show is False
    assert options.log_level == "DEBUG"


def test_missing_required():
    with pytest.raises(UsageError, match="-r/--right"):
        parse_program_options(["-l", "a.png"])


def test_missing_both_required():
    with pytest.raises(UsageError, match="-l/--left, -r/--right"):
        parse_program_options([])


def test_help_wins_over_missing_arguments():
    with pytest.raises(HelpRequested) as excinfo:
        parse_program_options(["-h"])
    assert "--numdisp" in excinfo.value.usage
    assert "--blocksize" in excinfo.value.usage
    assert excinfo.value.exit_code == 0


@pytest.mark.parametrize("argv", [
    ["-l", "a", "-r", "b", "-n", "many"],
    ["-l", "a", "-r", "b", "-n", "-4"],
    ["-l", "a", "-r", "b", "-b", "-21"],
    ["-l", "a", "-r", "b", "-m", "1.5"],
    ["-l", "a", "-r", "b", "--bogus"],
    ["-l", "a", "-r", "b", "--log-level", "chatty"],
])
def test_malformed_arguments(argv):
    with pytest.raises(UsageError):
        parse_program_options(argv)


def test_usage_error_exit_code():
    with pytest.raises(UsageError) as excinfo:
        parse_program_options([])
    assert excinfo.value.exit_code == 2


def _write_config(tmp_path, data, name="stereo.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_config_file_supplies_values(tmp_path):
    path = _write_config(tmp_path, {"left": "left.png", "right": "/data/right.png",
                                    "numdisp": 48, "blocksize": 11, "mindisp": -4})
    options = parse_program_options(["--config", str(path)])
    assert options.left_image == tmp_path / "left.png"
    assert options.right_image == Path("/data/right.png")
    assert options.search == SearchParameters(num_disparities=48, min_disparity=-4, block_size=11)


def test_command_line_overrides_config(tmp_path):
    path = _write_config(tmp_path, {"left": "left.png", "right": "right.png", "numdisp": 48})
    options = parse_program_options(["-c", str(path), "-n", "16", "-r", "other.png"])
    assert options.search.num_disparities == 16
    assert options.right_image == Path("other.png")
    assert options.left_image == tmp_path / "left.png"


def test_config_unknown_keys_ignored(tmp_path):
    path = _write_config(tmp_path, {"left": "l.png", "right": "r.png", "colormap": "jet"})
    config = Config(str(path))
    assert config.get("colormap") is None
    assert config.left == str(tmp_path / "l.png")
    with pytest.raises(AttributeError):
        config.colormap


def test_config_wrong_type(tmp_path):
    path = _write_config(tmp_path, {"numdisp": "64"})
    with pytest.raises(UsageError, match="numdisp"):
        Config(str(path))


def test_config_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(UsageError, match="invalid JSON"):
        parse_program_options(["-c", str(path)])


def test_config_missing_file(tmp_path):
    with pytest.raises(UsageError, match="cannot read config file"):
        parse_program_options(["-c", str(tmp_path / "absent.json")])


def test_config_must_be_object(tmp_path):
    path = _write_config(tmp_path, [1, 2, 3])
    with pytest.raises(UsageError, match="JSON object"):
        Config(str(path))
