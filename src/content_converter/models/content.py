"""Content model: the format-agnostic tree every codec reads and writes."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from ..types import ContentTypeError


Scalar = Optional[Union[bool, int, float, str]]

_SCALAR_TYPES = (bool, int, float, str)


class ContentKind(Enum):
    """Enumeration of Content variants."""
    PRIMITIVE = "primitive"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(eq=False)
class PrimitiveContent:
    """
    Leaf node holding a single scalar value.

    The value is None or exactly one of bool, int, float or str.
    Equality is type-strict: ``1``, ``1.0`` and ``True`` are distinct.
    """

    value: Scalar = None

    def __post_init__(self):
        """Validate the scalar type after initialization."""
        if self.value is not None and not isinstance(self.value, _SCALAR_TYPES):
            raise TypeError(
                f"PrimitiveContent cannot hold {type(self.value).__name__}"
            )

    @property
    def kind(self) -> ContentKind:
        return ContentKind.PRIMITIVE

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PrimitiveContent):
            return NotImplemented
        if type(self.value) is not type(other.value):
            return False
        if isinstance(self.value, float) and math.isnan(self.value):
            return math.isnan(other.value)
        return self.value == other.value

    __hash__ = None


@dataclass
class ArrayContent:
    """Ordered sequence of Content nodes."""

    children: List['Content'] = field(default_factory=list)

    @property
    def kind(self) -> ContentKind:
        return ContentKind.ARRAY


@dataclass
class ObjectContent:
    """
    Mapping from string key to Content.

    Keys keep insertion order for serialization; ``==`` ignores the order,
    use ``ordered_equal`` when the order matters.
    """

    children: Dict[str, 'Content'] = field(default_factory=dict)

    @property
    def kind(self) -> ContentKind:
        return ContentKind.OBJECT


Content = Union[PrimitiveContent, ArrayContent, ObjectContent]


def ordered_equal(left: Content, right: Content) -> bool:
    """
    Compare two trees including Object key order.

    Args:
        left: First tree
        right: Second tree

    Returns:
        True if both trees match node for node in stored order
    """
    if isinstance(left, ObjectContent) and isinstance(right, ObjectContent):
        if list(left.children) != list(right.children):
            return False
        return all(
            ordered_equal(value, right.children[key])
            for key, value in left.children.items()
        )
    if isinstance(left, ArrayContent) and isinstance(right, ArrayContent):
        if len(left.children) != len(right.children):
            return False
        return all(ordered_equal(a, b) for a, b in zip(left.children, right.children))
    if isinstance(left, PrimitiveContent) and isinstance(right, PrimitiveContent):
        return left == right
    return False


def natural_text(primitive: PrimitiveContent) -> str:
    """Canonical text form of a primitive value, empty for null."""
    value = primitive.value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    return str(value)


def from_native(value: Any) -> Content:
    """
    Build a Content tree from plain Python values.

    Args:
        value: dict, list/tuple, or scalar

    Returns:
        Equivalent Content tree

    Raises:
        ContentTypeError: If a value has no Content representation
    """
    if isinstance(value, dict):
        obj = ObjectContent()
        for key, item in value.items():
            if not isinstance(key, str):
                raise ContentTypeError(f"Object keys must be strings, got {type(key).__name__}")
            obj.children[key] = from_native(item)
        return obj
    if isinstance(value, (list, tuple)):
        return ArrayContent([from_native(item) for item in value])
    if value is None or isinstance(value, _SCALAR_TYPES):
        return PrimitiveContent(value)
    raise ContentTypeError(f"Cannot convert {type(value).__name__} to Content")


def to_native(content: Content) -> Any:
    """Convert a Content tree back into plain Python values."""
    if isinstance(content, ObjectContent):
        return {key: to_native(value) for key, value in content.children.items()}
    if isinstance(content, ArrayContent):
        return [to_native(item) for item in content.children]
    if isinstance(content, PrimitiveContent):
        return content.value
    raise ContentTypeError(f"Unknown Content node: {type(content).__name__}")
