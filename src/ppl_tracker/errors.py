"""Exceptions raised by the tracker core."""


class ValidationError(ValueError):
    """Bad user input. The message is meant to be shown to the user."""


class StorageReadError(Exception):
    """The persisted state blob could not be decoded."""
