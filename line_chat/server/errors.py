"""Errors reported back to a connection or raised by the storage adapters."""


class CommandError(Exception):
    """Failure written to the client as a single ``ERR:`` line."""

    message = "command failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    def __str__(self) -> str:
        return self.args[0]


class UsageError(CommandError):
    pass


class UnknownCommandError(CommandError):
    def __init__(self, name: str):
        super().__init__(f"unknown command: {name}")


class NameTakenError(CommandError):
    message = "name already taken"


class UserNotFoundError(CommandError):
    message = "no such user"


class InvalidPasswordError(CommandError):
    message = "invalid password"


class InternalError(CommandError):
    message = "internal error"


class StorageError(Exception):
    """Database failure inside a storage adapter."""
