"""Core type definitions for the Content Converter."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Content
    from .profiler import ConversionMetrics


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    STRUCTURE = "structure"
    FORMAT = "format"
    FILESYSTEM = "filesystem"


class ReservedNames:
    """
    Reserved Object keys used by the XML structural convention.

    Every name starts with a character that cannot begin an XML tag name,
    so a reserved key never collides with a real element.
    """
    DECLARATION = "?xml"
    ATTRIBUTES = "#attributes"
    TEXT = "#text"
    COMMENT = "#comment"
    CDATA = "#cdata-section"
    DOCUMENT = "#document"
    DOCUMENT_FRAGMENT = "#document-fragment"


# Keys never emitted as elements when rendering XML
SKIPPED_ON_RENDER = frozenset({
    ReservedNames.ATTRIBUTES,
    ReservedNames.COMMENT,
    ReservedNames.CDATA,
    ReservedNames.DOCUMENT,
    ReservedNames.DOCUMENT_FRAGMENT,
    ReservedNames.DECLARATION,
})


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str


@dataclass
class ConversionResult:
    """Result of a conversion run."""
    success: bool
    input_format: str
    output_format: str
    input_size: int = 0
    output_size: int = 0
    errors: Optional[List[str]] = None
    metrics: Optional['ConversionMetrics'] = None


class ConversionError(Exception):
    """Base exception for conversion failures."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class ParseError(ConversionError):
    """Malformed source bytes for the declared format."""

    def __init__(self, message: str, line: Optional[int] = None,
                 column: Optional[int] = None, offset: Optional[int] = None):
        if line is not None and column is not None:
            message = f"{message} at line {line}, column {column}"
        elif offset is not None:
            message = f"{message} at byte offset {offset}"
        super().__init__(message, ErrorType.SYNTAX,
                         context={"line": line, "column": column, "offset": offset})
        self.line = line
        self.column = column
        self.offset = offset


class StructureError(ConversionError):
    """Content tree that violates a codec's structural convention."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.STRUCTURE, context)


class UnsupportedFormatError(ConversionError):
    """Format or file manager name with no registered implementation."""

    def __init__(self, name: str, available: Optional[List[str]] = None):
        message = f"Unsupported format: {name!r}"
        if available:
            message += f" (available: {', '.join(available)})"
        super().__init__(message, ErrorType.FORMAT, context={"name": name})
        self.name = name


class ContentTypeError(TypeError):
    """A node that is not one of the three Content variants reached a codec."""


# Abstract base classes for interfaces

class CodecInterface(ABC):
    """Abstract interface for a format codec."""

    format_name: str = ""

    @abstractmethod
    def parse(self, data: bytes) -> 'Content':
        """Parse bytes of this format into a Content tree."""
        pass

    @abstractmethod
    def render(self, content: 'Content') -> bytes:
        """Render a Content tree into bytes of this format."""
        pass


class FileManagerInterface(ABC):
    """Abstract interface for byte sources and sinks."""

    @abstractmethod
    async def load(self, config: str) -> bytes:
        """Load bytes described by config."""
        pass

    @abstractmethod
    async def save(self, config: str, data: bytes) -> None:
        """Save bytes to the location described by config."""
        pass
