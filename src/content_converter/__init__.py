"""
Content Converter - Convert documents between JSON and XML.

Every conversion goes through a format-agnostic Content tree: the input
codec parses bytes into the tree and the output codec renders it again.
"""

__version__ = "1.0.0"

from .codecs import JSONCodec, XMLCodec, get_codec, available_formats
from .converter import ContentConverter
from .models import Content, PrimitiveContent, ArrayContent, ObjectContent
from .types import (
    ConversionError,
    ConversionResult,
    ParseError,
    StructureError,
    ReservedNames,
)

__all__ = [
    "ContentConverter",
    "JSONCodec",
    "XMLCodec",
    "get_codec",
    "available_formats",
    "Content",
    "PrimitiveContent",
    "ArrayContent",
    "ObjectContent",
    "ConversionError",
    "ConversionResult",
    "ParseError",
    "StructureError",
    "ReservedNames",
]
