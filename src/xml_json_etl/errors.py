"""Exceptions raised while turning XML documents into JSON."""

from pathlib import Path
from typing import Optional


class ConversionError(Exception):
    """Base class for every document-level conversion failure."""


class MalformedMarkupError(ConversionError):
    """The XML parser rejected the input."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)


class EmptyDocumentError(ConversionError):
    """The input parsed to nothing: there is no root element."""


class UnexpectedRootError(ConversionError):
    def __init__(self, expected: str, found: str):
        self.expected = expected
        self.found = found
        super().__init__(f"Expected root element '{expected}', found '{found}'")


class DocumentConversionError(ConversionError):
    """Wraps a failure with the path of the document that caused it."""

    def __init__(self, path: Path, cause: Exception):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed while parsing file: {self.path}: {cause}")
