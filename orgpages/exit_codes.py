"""
Standard exit codes and error types for orgpages.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors

# Application-specific exit codes (64-113 are typically available)
API_ERROR = 65           # GitHub API call failed while listing repositories
CONFIG_ERROR = 66        # Configuration file error


class CommandError(Exception):
    """
    Exception that aborts the run with a specific exit code.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class APIError(CommandError):
    """Raised when an external API call fails."""
    def __init__(self, message: str):
        super().__init__(message, API_ERROR)


class TransportError(APIError):
    """
    Raised when the organization's repository list cannot be fetched.

    Without the base list there is nothing to render, so this is fatal.
    """
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class EnrichmentError(Exception):
    """Raised when a single repository cannot be enriched."""
    def __init__(self, name: str, message: str):
        super().__init__(f"{name}: {message}")
        self.name = name


class MissingFragmentFile(Exception):
    """Raised when a curated HTML fragment is absent or unreadable."""
    def __init__(self, path, reason: str):
        super().__init__(f"Could not load {path}: {reason}")
        self.path = path
