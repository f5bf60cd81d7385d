"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1: Compared strings differ
    2: Usage errors (reported by click)
    10-19: Configuration errors
    20-29: Input/output file errors
    30-39: Network errors
    50-59: Data errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for ucvt CLI commands."""

    SUCCESS = 0
    STRINGS_DIFFER = 1
    USAGE_ERROR = 2

    # Configuration errors (10-19)
    CONFIG_ERROR = 10

    # Input/output file errors (20-29)
    INPUT_NOT_FOUND = 20
    INPUT_INVALID = 21
    OUTPUT_ERROR = 22

    # Network errors (30-39)
    FETCH_ERROR = 30

    # Data errors (50-59)
    PARSE_ERROR = 51
