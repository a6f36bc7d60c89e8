"""
Errors raised while turning an uploaded file into text fragments.

Every error is terminal for the file: no partial fragment list is returned.
"""
from typing import Iterable


class ExtractionError(Exception):
    """Base class for all file extraction failures."""

    kind = "ExtractionError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedFormat(ExtractionError):
    kind = "UnsupportedFormat"

    def __init__(self, extension: str, supported: Iterable[str]):
        self.extension = extension
        self.supported = list(supported)
        received = extension or "(none)"
        super().__init__(
            f"Unsupported file format: {received}. "
            f"Supported formats: {', '.join(self.supported)}"
        )


class FileTooLarge(ExtractionError):
    kind = "FileTooLarge"

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"File size must be less than {limit // (1024 * 1024)}MB "
            f"(received {size} bytes)"
        )


class EmptyContent(ExtractionError):
    kind = "EmptyContent"


class MalformedInput(ExtractionError):
    kind = "MalformedInput"
