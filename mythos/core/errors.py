"""Exception types raised by the studio core."""


class MythosError(Exception):
    """Base class for all studio errors."""


class GenerationError(MythosError):
    """A hosted model call failed or returned nothing usable."""


class StructuredOutputError(GenerationError):
    """The model returned JSON that does not match the requested schema."""


class BatchFailedError(MythosError):
    """Every task in a fan-out batch failed (or the batch was empty)."""


class StorageError(MythosError):
    """The persistence port could not read or write a key."""


class UnsupportedFileError(MythosError):
    """An imported file type cannot be converted to text."""


class LayoutError(MythosError, ValueError):
    """Unknown paper/margin preset or invalid zoom."""
