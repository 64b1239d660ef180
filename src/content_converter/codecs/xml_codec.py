"""XML codec: maps XML documents onto the Content model and back."""

import codecs
import logging
import re
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional
from xml.sax.saxutils import escape
from ..models import (
    Content,
    PrimitiveContent,
    ArrayContent,
    ObjectContent,
    natural_text,
)
from ..types import (
    CodecInterface,
    ContentTypeError,
    ParseError,
    ReservedNames,
    SKIPPED_ON_RENDER,
    StructureError,
)


_DECLARATION = re.compile(rb"\A(?:\xef\xbb\xbf)?<\?xml\s(?P<body>.*?)\?>", re.DOTALL)
_PSEUDO_ATTRIBUTE = re.compile(r"""([A-Za-z_][\w.-]*)\s*=\s*(?:"([^"]*)"|'([^']*)')""")
_XML_NAME = re.compile(r"(?:[^\W\d]|:)[\w.:-]*\Z")
_INTEGER = re.compile(r"-?[0-9]+\Z")
_FLOAT = re.compile(r"-?(?:[0-9]+\.[0-9]*|\.[0-9]+|[0-9]+)(?:[eE][-+]?[0-9]+)?\Z")

_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


def coerce_text(text: str) -> PrimitiveContent:
    """
    Coerce an XML text leaf into the narrowest primitive.

    ``true``/``false`` become booleans, integer and decimal literals become
    numbers, anything else stays a string. Numbers are only coerced when
    their natural text form reproduces the source text exactly, so
    ``007`` or ``1.50`` stay strings and render back unchanged.

    Args:
        text: Raw text content

    Returns:
        PrimitiveContent holding the coerced value
    """
    if text == "true":
        return PrimitiveContent(True)
    if text == "false":
        return PrimitiveContent(False)
    if _INTEGER.match(text):
        number = int(text)
        if str(number) == text:
            return PrimitiveContent(number)
    elif _FLOAT.match(text):
        real = float(text)
        if repr(real) == text:
            return PrimitiveContent(real)
    return PrimitiveContent(text)


class XMLCodec(CodecInterface):
    """
    XML codec using the element-tree convention.

    A document parses to ``{"?xml": {"#attributes": {...}, <root>: {...}}}``.
    Every element is an Object: attributes live in an ``#attributes`` bag,
    text runs under ``#text`` and child elements under their tag name, with
    repeated tags collected into an Array in source order.
    """

    format_name = "xml"

    def __init__(self, encoding: str = "utf-8", logger: Optional[logging.Logger] = None):
        """
        Initialize the XML codec.

        Args:
            encoding: Encoding used for rendered output
            logger: Optional logger instance
        """
        self.encoding = encoding
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, data: bytes) -> Content:
        """
        Parse XML bytes into a declaration-wrapped Content tree.

        Args:
            data: Raw XML bytes

        Returns:
            Object with the declaration marker as its only member

        Raises:
            ParseError: If the bytes are not well-formed XML
            StructureError: If the document nests deeper than the supported depth
        """
        if not data.strip():
            raise ParseError("XML input is empty", offset=0)

        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            line, column = e.position
            reason = str(e).rsplit(": line", 1)[0]
            raise ParseError(f"Invalid XML: {reason}", line=line, column=column + 1) from e
        except (LookupError, ValueError) as e:
            raise ParseError(f"Invalid XML: {e}", offset=0) from e

        declaration = ObjectContent()
        pseudo_attributes = self._parse_declaration(data)
        if pseudo_attributes is not None:
            declaration.children[ReservedNames.ATTRIBUTES] = pseudo_attributes

        try:
            declaration.children[root.tag] = self._element_to_content(root)
        except RecursionError as e:
            raise StructureError("XML document nests deeper than the supported depth") from e

        self.logger.debug(f"Parsed XML document <{root.tag}> of {len(data)} bytes")
        return ObjectContent({ReservedNames.DECLARATION: declaration})

    def render(self, content: Content) -> bytes:
        """
        Render a declaration-wrapped Content tree as XML bytes.

        Args:
            content: Tree shaped like the output of ``parse``

        Returns:
            Encoded XML text

        Raises:
            StructureError: If the tree breaks the XML structural convention or
                holds text the declared encoding cannot represent
        """
        if (not isinstance(content, ObjectContent)
                or list(content.children) != [ReservedNames.DECLARATION]):
            raise StructureError(
                f"missing declaration/root wrapper: top level must be an object "
                f"with the single key {ReservedNames.DECLARATION!r}"
            )

        declaration = content.children[ReservedNames.DECLARATION]
        if not isinstance(declaration, ObjectContent):
            raise StructureError(f"{ReservedNames.DECLARATION!r} must be an object")

        parts: List[str] = []
        if ReservedNames.ATTRIBUTES in declaration.children:
            parts.append("<?xml")
            self._write_attributes(declaration, parts)
            parts.append("?>")

        tag, element = self._document_element(declaration)
        try:
            self._write_element(tag, element, parts)
        except RecursionError as e:
            raise StructureError("Content tree nests deeper than the supported depth") from e

        encoding = self._output_encoding(declaration)
        try:
            return "".join(parts).encode(encoding)
        except UnicodeEncodeError as e:
            raise StructureError(f"Document text cannot be encoded as {encoding}: {e.reason}") from e

    def _output_encoding(self, declaration: ObjectContent) -> str:
        """Return the encoding named by the declaration, falling back to the codec default."""
        bag = declaration.children.get(ReservedNames.ATTRIBUTES)
        if not isinstance(bag, ObjectContent):
            return self.encoding
        declared = bag.children.get("encoding")
        if not isinstance(declared, PrimitiveContent) or not isinstance(declared.value, str):
            return self.encoding
        try:
            codecs.lookup(declared.value)
        except LookupError as e:
            raise StructureError(f"Declared encoding {declared.value!r} is not supported") from e
        return declared.value

    def _parse_declaration(self, data: bytes) -> Optional[ObjectContent]:
        match = _DECLARATION.match(data)
        if match is None:
            return None
        body = match.group("body").decode("latin-1")
        attributes = ObjectContent()
        for name, double_quoted, single_quoted in _PSEUDO_ATTRIBUTE.findall(body):
            attributes.children[name] = PrimitiveContent(double_quoted or single_quoted)
        return attributes

    def _element_to_content(self, element: ET.Element) -> ObjectContent:
        obj = ObjectContent()
        if element.attrib:
            obj.children[ReservedNames.ATTRIBUTES] = ObjectContent({
                name: PrimitiveContent(value) for name, value in element.attrib.items()
            })

        groups: Dict[str, List[Content]] = {}
        self._collect_text(groups, element.text)
        for child in element:
            groups.setdefault(child.tag, []).append(self._element_to_content(child))
            self._collect_text(groups, child.tail)

        for key, members in groups.items():
            obj.children[key] = members[0] if len(members) == 1 else ArrayContent(members)
        return obj

    @staticmethod
    def _collect_text(groups: Dict[str, List[Content]], text: Optional[str]) -> None:
        # Whitespace-only runs are layout, not data
        if text and text.strip():
            groups.setdefault(ReservedNames.TEXT, []).append(coerce_text(text))

    def _document_element(self, declaration: ObjectContent):
        """Return the single (tag, content) pair rendered as the document element."""
        elements = [
            (key, value) for key, value in declaration.children.items()
            if key not in SKIPPED_ON_RENDER
        ]
        if len(elements) != 1:
            raise StructureError(
                f"XML document must have exactly one root element, found {len(elements)}"
            )
        tag, value = elements[0]
        if tag == ReservedNames.TEXT or isinstance(value, ArrayContent):
            raise StructureError(f"{tag!r} cannot be the root element of an XML document")
        return tag, value

    def _write_children(self, obj: ObjectContent, parts: List[str]) -> None:
        for key, value in obj.children.items():
            if key in SKIPPED_ON_RENDER:
                continue
            if key == ReservedNames.TEXT:
                self._write_text(value, parts)
            elif isinstance(value, ArrayContent):
                for item in value.children:
                    if not isinstance(item, ObjectContent):
                        raise StructureError(
                            f"Array under <{key}> must contain only objects, "
                            f"found {type(item).__name__}"
                        )
                    self._write_element(key, item, parts)
            else:
                self._write_element(key, value, parts)

    def _write_element(self, tag: str, value: Content, parts: List[str]) -> None:
        self._check_name(tag)
        if isinstance(value, ObjectContent):
            parts.append(f"<{tag}")
            self._write_attributes(value, parts)
            parts.append(">")
            self._write_children(value, parts)
            parts.append(f"</{tag}>")
        elif isinstance(value, PrimitiveContent):
            parts.append(f"<{tag}>{escape(natural_text(value))}</{tag}>")
        elif isinstance(value, ArrayContent):
            raise StructureError(f"Nested array cannot be rendered as element <{tag}>")
        else:
            raise ContentTypeError(f"Unknown Content node: {type(value).__name__}")

    @staticmethod
    def _write_text(value: Content, parts: List[str]) -> None:
        if isinstance(value, PrimitiveContent):
            parts.append(escape(natural_text(value)))
        elif isinstance(value, ArrayContent):
            for item in value.children:
                if not isinstance(item, PrimitiveContent):
                    raise StructureError(
                        f"{ReservedNames.TEXT!r} array must contain only primitives, "
                        f"found {type(item).__name__}"
                    )
                parts.append(escape(natural_text(item)))
        elif isinstance(value, ObjectContent):
            raise StructureError(f"{ReservedNames.TEXT!r} must be a primitive or an array of primitives")
        else:
            raise ContentTypeError(f"Unknown Content node: {type(value).__name__}")

    def _write_attributes(self, obj: ObjectContent, parts: List[str]) -> None:
        bag = obj.children.get(ReservedNames.ATTRIBUTES)
        if bag is None:
            return
        if not isinstance(bag, ObjectContent):
            raise StructureError(f"{ReservedNames.ATTRIBUTES!r} must be an object")

        for name, value in bag.children.items():
            if not isinstance(value, PrimitiveContent):
                raise StructureError(f"Attribute {name!r} must be a primitive, found {type(value).__name__}")
            # Null attributes are omitted entirely
            if value.value is None:
                continue
            self._check_name(name)
            parts.append(f' {name}="{escape(natural_text(value), _ATTRIBUTE_ENTITIES)}"')

    @staticmethod
    def _check_name(name: str) -> None:
        if not _XML_NAME.match(name):
            raise StructureError(f"{name!r} is not a valid XML name")
