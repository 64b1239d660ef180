"""Tests for the JSON codec."""

import pytest
from content_converter.codecs import JSONCodec
from content_converter.models import (
    PrimitiveContent,
    ArrayContent,
    ObjectContent,
    from_native,
    ordered_equal,
)
from content_converter.types import ContentTypeError, ErrorType, ParseError, StructureError


class TestJSONCodecParse:
    """Tests for JSONCodec.parse."""

    def setup_method(self):
        """Set up test fixtures."""
        self.codec = JSONCodec()

    def test_parse_scalars(self):
        """Test mapping of JSON scalars onto primitives."""
        tree = self.codec.parse(b'{"n":null,"t":true,"f":false,"i":7,"x":7.0,"s":"7"}')

        assert tree.children["n"] == PrimitiveContent(None)
        assert tree.children["t"] == PrimitiveContent(True)
        assert tree.children["f"] == PrimitiveContent(False)
        assert tree.children["i"] == PrimitiveContent(7)
        assert tree.children["x"] == PrimitiveContent(7.0)
        assert tree.children["s"] == PrimitiveContent("7")

    def test_parse_keeps_integer_float_distinction(self):
        """Test that integer literals stay int and fraction/exponent literals become float."""
        tree = self.codec.parse(b'[1,1.5,1e3]')

        assert [type(child.value) for child in tree.children] == [int, float, float]

    def test_parse_preserves_member_order(self):
        """Test that object member order is kept."""
        tree = self.codec.parse(b'{"z":1,"a":2,"m":3}')

        assert list(tree.children) == ["z", "a", "m"]

    def test_parse_nested_structure(self, nested_json):
        """Test parsing nested arrays and objects."""
        tree = self.codec.parse(nested_json)

        expected = ObjectContent({
            "test": ArrayContent([
                PrimitiveContent(1),
                ObjectContent({"a": ArrayContent([ObjectContent({"b": PrimitiveContent(2)})])}),
                PrimitiveContent(3),
            ])
        })
        assert ordered_equal(tree, expected)

    def test_parse_primitive_root(self):
        """Test that a bare scalar is a valid document."""
        assert self.codec.parse(b"4") == PrimitiveContent(4)
        assert self.codec.parse(b"null") == PrimitiveContent(None)

    def test_parse_tolerates_byte_order_mark(self):
        """Test parsing input that starts with a UTF-8 BOM."""
        assert self.codec.parse(b'\xef\xbb\xbf{"a":1}') == from_native({"a": 1})

    def test_parse_truncated_object(self):
        """Test that unbalanced input fails with a positioned ParseError."""
        with pytest.raises(ParseError) as exc_info:
            self.codec.parse(b'{"a":1')

        error = exc_info.value
        assert error.error_type == ErrorType.SYNTAX
        assert error.line == 1
        assert error.column is not None
        assert error.offset is not None
        assert "line 1, column" in str(error)

    def test_parse_error_reports_later_line(self):
        """Test that the reported line follows the input."""
        with pytest.raises(ParseError) as exc_info:
            self.codec.parse(b'{\n"a": 1,\n"b": }')

        assert exc_info.value.line == 3

    def test_parse_empty_input(self):
        """Test that empty input is a ParseError."""
        with pytest.raises(ParseError, match="empty"):
            self.codec.parse(b"   ")

    def test_parse_rejects_non_standard_constants(self):
        """Test that NaN and Infinity are not accepted."""
        with pytest.raises(ParseError, match="NaN") as exc_info:
            self.codec.parse(b'["NaN",NaN]')

        assert exc_info.value.line == 1
        assert exc_info.value.column == 8

        with pytest.raises(ParseError, match="Infinity"):
            self.codec.parse(b'{"a":-Infinity}')

    def test_parse_excessive_nesting(self):
        """Test that nesting beyond the supported depth is a structural failure."""
        depth = 100000
        with pytest.raises(StructureError, match="supported depth"):
            self.codec.parse(b"[" * depth + b"]" * depth)

    def test_parse_invalid_utf8(self):
        """Test that undecodable bytes report a byte offset."""
        with pytest.raises(ParseError) as exc_info:
            self.codec.parse(b'{"a":"\xff"}')

        assert exc_info.value.offset == 6
        assert "byte offset 6" in str(exc_info.value)


class TestJSONCodecRender:
    """Tests for JSONCodec.render."""

    def setup_method(self):
        """Set up test fixtures."""
        self.codec = JSONCodec()

    def test_render_compact(self):
        """Test that no whitespace is introduced."""
        tree = from_native({"a": [1, 2], "b": {"c": None}, "d": False, "e": 0.5})

        assert self.codec.render(tree) == b'{"a":[1,2],"b":{"c":null},"d":false,"e":0.5}'

    def test_render_escapes_quote_and_newline(self):
        """Test escaping of an embedded double-quote and newline."""
        value = 'say "hi"\nbye'
        rendered = self.codec.render(PrimitiveContent(value))

        assert rendered == b'"say \\"hi\\"\\nbye"'
        assert self.codec.parse(rendered) == PrimitiveContent(value)

    def test_render_escapes_backslash(self):
        """Test that backslashes survive a round trip."""
        rendered = self.codec.render(PrimitiveContent("C:\\temp"))

        assert rendered == b'"C:\\\\temp"'
        assert self.codec.parse(rendered).value == "C:\\temp"

    def test_render_escapes_keys(self):
        """Test that object keys are escaped like string values."""
        tree = ObjectContent({'we"ird\nkey': PrimitiveContent(1)})
        rendered = self.codec.render(tree)

        assert rendered == b'{"we\\"ird\\nkey":1}'
        assert self.codec.parse(rendered) == tree

    def test_render_keeps_non_ascii(self):
        """Test that non-ASCII text is emitted as UTF-8."""
        assert self.codec.render(PrimitiveContent("café")) == '"café"'.encode("utf-8")

    def test_render_lone_surrogate(self):
        """Test that an escaped lone surrogate renders back as an escape."""
        document = b'["\\ud800"]'
        tree = self.codec.parse(document)

        assert tree == ArrayContent([PrimitiveContent("\ud800")])
        assert self.codec.render(tree) == document

    def test_render_escapes_text_outside_encoding(self):
        """Test that strings the output encoding cannot hold are ASCII-escaped."""
        codec = JSONCodec(encoding="latin-1")
        rendered = codec.render(ArrayContent([PrimitiveContent("café"), PrimitiveContent("łódź")]))

        assert rendered == '["café","\\u0142\\u00f3d\\u017a"]'.encode("latin-1")
        assert codec.parse(rendered) == ArrayContent([PrimitiveContent("café"), PrimitiveContent("łódź")])

    def test_render_non_finite_float(self):
        """Test that infinite floats cannot be rendered."""
        with pytest.raises(StructureError):
            self.codec.render(ArrayContent([PrimitiveContent(float("inf"))]))

    def test_render_unknown_node(self):
        """Test that foreign nodes are programmer errors."""
        with pytest.raises(ContentTypeError):
            self.codec.render(ArrayContent([{"raw": "dict"}]))

    @pytest.mark.parametrize("document", [
        b"4",
        b"{}",
        b"[]",
        b'{"test":1}',
        b'{"test":[1]}',
        b'{"test":[1,2,3]}',
        b'{"test":[1,{"a":[{"b":2}]},3]}',
        b'[{"test":1}]',
        b'{"a":1.5,"b":true,"c":null,"d":"x","e":-3}',
        b'{"quote":"a\\"b","line":"a\\nb","tab":"a\\tb"}',
    ])
    def test_round_trip(self, document):
        """Test that render(parse(text)) reproduces compact JSON exactly."""
        assert self.codec.render(self.codec.parse(document)) == document
