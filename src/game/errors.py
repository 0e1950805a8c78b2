"""Error kinds raised by the game core."""


class GameError(Exception):
    """Base class for failures a caller can report to players."""


class NoActiveSessionError(GameError):
    def __init__(self, message: str = "there's no game in progress"):
        super().__init__(message)


class StorageError(GameError):
    """A read or write against the game database failed."""


class InvariantViolationError(GameError):
    """Persisted or in-memory state contradicts itself; this is a bug."""
