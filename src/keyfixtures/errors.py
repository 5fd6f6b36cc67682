"""Error types raised while generating key fixtures."""

from typing import Optional


class KeyFixtureError(Exception):
    """Base class for all generator failures."""


class KeyGenerationError(KeyFixtureError):
    """PGPy failed to build or serialize a key for an identity name."""

    def __init__(self, name: str, cause: Optional[BaseException] = None) -> None:
        self.name = name
        self.cause = cause
        message = f"Key generation failed for '{name}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class OutputWriteError(KeyFixtureError):
    """The generated artifact could not be created or written."""

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        message = f"Could not write key table to {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class TemplateRenderError(KeyFixtureError):
    """A value cannot be embedded verbatim in the selected output format."""


class InvalidNameError(KeyFixtureError, ValueError):
    """An identity name cannot be turned into a key identity."""


class DuplicateNameError(InvalidNameError):
    """The input name list repeats one or more names."""

    def __init__(self, duplicates) -> None:
        self.duplicates = list(duplicates)
        super().__init__(f"Duplicate identity names: {', '.join(self.duplicates)}")
