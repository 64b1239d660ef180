"""JSON codec: parses and renders JSON text against the Content model."""

import json
import logging
import math
import re
from typing import Any, List, Optional
from ..models import (
    Content,
    PrimitiveContent,
    ArrayContent,
    ObjectContent,
    natural_text,
    from_native,
)
from ..types import CodecInterface, ContentTypeError, ParseError, StructureError


# Strings are matched first so constants inside them are skipped
_CONSTANT_SCAN = re.compile(r'"(?:[^"\\]|\\.)*"|(-?Infinity|NaN)')


class _NonStandardConstant(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    raise _NonStandardConstant(name)


class JSONCodec(CodecInterface):
    """
    JSON codec built on the standard library decoder.

    Parsing keeps member order and the integer/float distinction of the
    source literals; rendering emits compact JSON with no added whitespace,
    so ``render(parse(text)) == text`` for compact documents.
    """

    format_name = "json"

    def __init__(self, encoding: str = "utf-8", logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON codec.

        Args:
            encoding: Text encoding of input and output bytes
            logger: Optional logger instance
        """
        self.encoding = encoding
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, data: bytes) -> Content:
        """
        Parse JSON bytes into a Content tree.

        Args:
            data: Raw JSON bytes

        Returns:
            Content tree mirroring the JSON document

        Raises:
            ParseError: If the bytes are not valid RFC 8259 JSON
            StructureError: If the document nests deeper than the supported depth
        """
        text = self._decode(data)
        if not text.strip():
            raise ParseError("JSON input is empty", offset=0)

        try:
            native = json.loads(text, parse_constant=_reject_constant)
            content = from_native(native)
        except json.JSONDecodeError as e:
            raise ParseError(
                f"Invalid JSON: {e.msg}",
                line=e.lineno,
                column=e.colno,
                offset=len(text[:e.pos].encode(self.encoding)),
            ) from e
        except _NonStandardConstant as e:
            raise self._constant_error(text, str(e)) from e
        except RecursionError as e:
            raise StructureError("JSON document nests deeper than the supported depth") from e

        self.logger.debug(f"Parsed JSON document of {len(data)} bytes")
        return content

    def render(self, content: Content) -> bytes:
        """
        Render a Content tree as compact JSON bytes.

        Args:
            content: Tree to render

        Returns:
            Encoded JSON text

        Raises:
            StructureError: If a float value is NaN or infinite, or the tree
                nests deeper than the supported depth
        """
        parts: List[str] = []
        try:
            self._write(content, parts)
        except RecursionError as e:
            raise StructureError("Content tree nests deeper than the supported depth") from e
        return "".join(parts).encode(self.encoding)

    def _decode(self, data: bytes) -> str:
        try:
            text = data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise ParseError(f"Input is not valid {self.encoding}: {e.reason}", offset=e.start) from e
        # Tolerate a UTF-8 byte order mark
        return text[1:] if text.startswith("\ufeff") else text

    def _constant_error(self, text: str, name: str) -> ParseError:
        """Locate a NaN/Infinity literal outside of strings."""
        for match in _CONSTANT_SCAN.finditer(text):
            if match.group(1) == name:
                pos = match.start(1)
                line = text.count("\n", 0, pos) + 1
                column = pos - text.rfind("\n", 0, pos)
                return ParseError(f"Invalid JSON: non-standard constant {name}",
                                  line=line, column=column, offset=len(text[:pos].encode(self.encoding)))
        return ParseError(f"Invalid JSON: non-standard constant {name}")

    def _write(self, content: Content, parts: List[str]) -> None:
        if isinstance(content, ArrayContent):
            parts.append("[")
            for index, child in enumerate(content.children):
                if index:
                    parts.append(",")
                self._write(child, parts)
            parts.append("]")
        elif isinstance(content, ObjectContent):
            parts.append("{")
            for index, (key, child) in enumerate(content.children.items()):
                if index:
                    parts.append(",")
                parts.append(self._quote(key))
                parts.append(":")
                self._write(child, parts)
            parts.append("}")
        elif isinstance(content, PrimitiveContent):
            parts.append(self._format_primitive(content))
        else:
            raise ContentTypeError(f"Unknown Content node: {type(content).__name__}")

    def _format_primitive(self, primitive: PrimitiveContent) -> str:
        value = primitive.value
        if value is None:
            return "null"
        if isinstance(value, str):
            return self._quote(value)
        if isinstance(value, float) and not math.isfinite(value):
            raise StructureError(f"JSON cannot represent float value {value!r}")
        return natural_text(primitive)

    def _quote(self, text: str) -> str:
        # Escapes quotes, backslashes and control characters; keeps non-ASCII
        quoted = json.dumps(text, ensure_ascii=False)
        try:
            quoted.encode(self.encoding)
        except UnicodeEncodeError:
            # Lone surrogates and characters outside the output encoding
            return json.dumps(text)
        return quoted
