import sys
from typing import Optional, Sequence

from config.config import parse_program_options, ProgramOptions
from src_stereo_nccr.disparity_refactored import DisparityCalculator
from src_stereo_nccr.errors import HelpRequested, UsageError, InputError, PreconditionViolation
from utils.logger_config import LoggerConfig, get_logger

logger = get_logger(__name__)


def process_stereo_pair(options: ProgramOptions) -> None:
    """
    Compute and output the disparity map for the configured stereo pair.

    Args:
        options (ProgramOptions): Parsed command-line options.
    """
    calculator = DisparityCalculator(options)
    calculator.create_disparity()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the disparity pipeline and return the process exit status.
    """
    if argv is None:
        argv = sys.argv[1:]

    try:
        options = parse_program_options(argv)
    except HelpRequested as e:
        print(e.usage)
        return e.exit_code
    except UsageError as e:
        print(f"error: {e}", file=sys.stderr)
        print("Try '--help' for more information.", file=sys.stderr)
        return e.exit_code

    LoggerConfig.set_level(options.log_level)

    try:
        process_stereo_pair(options)
    except InputError as e:
        logger.error(f"input error: {e}")
        return e.exit_code
    except PreconditionViolation as e:
        logger.error(f"invalid search parameters: {e}")
        return e.exit_code
    except Exception as e:
        logger.exception(f"unexpected error: {e}")
        return 1

    logger.info("Processing completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
