"""Exception types shared by the instruction, dispatch and storage layers."""


class GarlicError(Exception):
    """Base class for all errors raised by the garlic package."""


class AssetUnavailable(GarlicError):
    """An instruction's backing file is unset or cannot be read."""


class NoConnection(GarlicError):
    """A send was attempted before the robot opened its connection."""


class UnresolvableInstruction(GarlicError):
    """Neither content nor a name the robot could resolve is available."""


class InvalidIdentifier(GarlicError, ValueError):
    """A record identifier is not a well-formed UUID."""


class NotFound(GarlicError, LookupError):
    """No record matches the given identifier."""


class IdentifierNotAllowed(GarlicError, ValueError):
    """The caller tried to choose a record's identifier on create."""


class MissingAsset(GarlicError, FileNotFoundError):
    """An audio file referenced by a session does not exist on disk."""


class StoreError(GarlicError):
    """A store file cannot be created or decoded."""
