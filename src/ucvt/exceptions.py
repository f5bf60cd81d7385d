"""Custom exceptions for ucvt.

Conversion and comparison never raise for text content: malformed input is
reported in-band. These exceptions cover the tooling around the core, namely
case-fold table generation and configuration loading.
"""


class UcvtError(Exception):
    """Base exception for ucvt errors.

    All ucvt-specific exceptions inherit from this class, allowing callers
    to catch them with a single except clause if desired.
    """


class CaseFoldingError(UcvtError):
    """Base class for case-fold table generation errors."""


class CaseFoldingParseError(CaseFoldingError):
    """Raised when a CaseFolding.txt data line cannot be used.

    Attributes:
        line_number: 1-based line number in the source file.
        line: The offending line, without its trailing newline.
        reason: What was wrong with it.
    """

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        """Initialize the error.

        Args:
            line_number: 1-based line number in the source file.
            line: The offending line.
            reason: Human-readable description of the problem.
        """
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {line!r}")


class CaseFoldingFetchError(CaseFoldingError):
    """Raised when CaseFolding.txt cannot be downloaded.

    Attributes:
        url: The URL that was requested.
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Cannot fetch {url}: {reason}")


class ConfigError(UcvtError):
    """Raised when a configuration file cannot be read or is invalid."""
