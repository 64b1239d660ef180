"""Data models for the Content Converter."""

from .content import (
    Content,
    ContentKind,
    PrimitiveContent,
    ArrayContent,
    ObjectContent,
    ordered_equal,
    natural_text,
    from_native,
    to_native,
)

__all__ = [
    "Content",
    "ContentKind",
    "PrimitiveContent",
    "ArrayContent",
    "ObjectContent",
    "ordered_equal",
    "natural_text",
    "from_native",
    "to_native",
]
