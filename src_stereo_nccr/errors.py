"""
Error types for the NCCR stereo disparity toolkit.

Each failure class maps to a distinct user-facing report and exit status
in ``main.py``.
"""


class StereoNCCRError(Exception):
    """Base class for all toolkit errors."""

    exit_code = 1


class UsageError(StereoNCCRError):
    """Malformed or missing command-line arguments."""

    exit_code = 2


class HelpRequested(StereoNCCRError):
    """
    Raised when ``--help`` is given. Not a failure: carries the usage text
    so the caller can print it and exit with success.
    """

    exit_code = 0

    def __init__(self, usage: str):
        super().__init__(usage)
        self.usage = usage


class InputError(StereoNCCRError):
    """Unreadable image file or incompatible image geometry."""


class PreconditionViolation(StereoNCCRError, ValueError):
    """Search parameters that cannot be applied to the given image geometry."""
