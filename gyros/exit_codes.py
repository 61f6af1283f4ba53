"""
Standard exit codes for gyros commands.

Following Unix/POSIX conventions for command-line tools.
"""

# Standard POSIX exit codes
SUCCESS = 0              # Every dispatched command succeeded
GENERAL_ERROR = 1        # General errors (every repository failed)

# Application-specific exit codes (64-113 are typically available)
NO_REPOS_FOUND = 64      # --only matched no configured repository
CONFIG_ERROR = 66        # Configuration file missing, invalid or empty
PARTIAL_SUCCESS = 71     # Some repositories succeeded, some failed
INTERRUPTED = 130        # Dispatch stopped by Ctrl+C (SIGINT)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """Raised when the repository set cannot be loaded."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class NotFoundError(CommandError):
    """Raised when a repository filter matches nothing."""
    def __init__(self, message: str = "No repositories found"):
        super().__init__(message, NO_REPOS_FOUND)


class PartialSuccessError(CommandError):
    """Raised after a dispatch in which at least one repository failed."""
    def __init__(self, message: str, succeeded: int = 0, failed: int = 0):
        code = PARTIAL_SUCCESS if succeeded > 0 else GENERAL_ERROR
        super().__init__(message, code)
        self.succeeded = succeeded
        self.failed = failed
