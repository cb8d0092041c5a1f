"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): The tree was copied (or previewed)
    - GENERAL_ERROR (1): Invalid input, config issues, or the root could not be copied
    - ABORTED (2): Strict mode stopped after a page failed
    - AUTH_ERROR (3): Authentication or authorization failure
    - NETWORK_ERROR (4): Network connectivity or API availability issues

    Example:
        >>> sys.exit(ExitCode.SUCCESS)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    ABORTED = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
