"""Errors raised by the stat pipeline.

Every error carries the process exit code the CLI uses for it, so callers
can tell configuration, resolution and output failures apart.
"""


class Names2StatsError(Exception):
    """Base exception for names2stats."""

    exit_code: int = 1


class ConfigMissingError(Names2StatsError):
    """Raised when the sandbox root location is not configured."""

    exit_code = 78

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Configuration value {key} missing")


class RootUnavailableError(Names2StatsError):
    """Raised when the sandbox root directory cannot be opened."""

    exit_code = 66

    def __init__(self, root: str, reason: str | None = None):
        self.root = root
        self.reason = reason
        msg = f"Root directory '{root}' is unavailable"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PathEscapesRootError(Names2StatsError):
    """Raised when a name resolves outside the sandbox root."""

    exit_code = 77

    def __init__(self, path: str, root: str | None = None):
        self.path = path
        self.root = root
        msg = f"Path '{path}' escapes the root directory"
        if root:
            msg += f" {root}"
        super().__init__(msg)


class NameNotFoundError(Names2StatsError):
    """Raised when no entry exists for a name inside the root."""

    exit_code = 65

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No such file or directory: '{path}'")


class StatUnavailableError(Names2StatsError):
    """Raised when metadata for an existing name cannot be read."""

    exit_code = 74

    def __init__(self, path: str, reason: str | None = None):
        self.path = path
        self.reason = reason
        msg = f"Failed to stat '{path}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class EncodeFailureError(Names2StatsError):
    """Raised when a record cannot be serialized or written."""

    exit_code = 73

    def __init__(self, reason: str, path: str | None = None):
        self.reason = reason
        self.path = path
        msg = "Failed to encode"
        if path is not None:
            msg += f" '{path}'"
        msg += f": {reason}"
        super().__init__(msg)
