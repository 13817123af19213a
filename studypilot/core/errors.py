# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Error taxonomy shared by the store, the storage adapters and the HTTP layer.
"""


class InvalidArgument(ValueError):
    """A caller passed a value outside the accepted domain (e.g. 'sunday')."""


class CorruptPersistedState(ValueError):
    """A stored value failed structural validation while loading."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Stored value under '{key}' is invalid: {reason}")
        self.key = key
        self.reason = reason


class StorageWriteFailure(RuntimeError):
    """The storage backend could not durably write a value."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Could not write '{key}': {reason}")
        self.key = key
        self.reason = reason


class AuthenticationError(Exception):
    """Mock sign-in rejected the supplied credentials."""
