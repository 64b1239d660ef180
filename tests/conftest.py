"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def note_xml():
    """Simple XML document with a declaration and two children."""
    return b'<?xml version="1.0"?><note><to>Tove</to><from>Jani</from></note>'


@pytest.fixture
def note_json():
    """JSON encoding of the tree parsed from note_xml."""
    return (
        b'{"?xml":{"#attributes":{"version":"1.0"},'
        b'"note":{"to":{"#text":"Tove"},"from":{"#text":"Jani"}}}}'
    )


@pytest.fixture
def nested_json():
    """Compact JSON with nested arrays and objects."""
    return b'{"test":[1,{"a":[{"b":2}]},3]}'


@pytest.fixture
def catalog_xml():
    """XML document with attributes, repeated elements and typed text."""
    return (
        b'<?xml version="1.0" encoding="UTF-8"?>'
        b'<catalog owner="ACME">'
        b'<book id="b1"><title>Dune</title><price>9.5</price><stock>12</stock></book>'
        b'<book id="b2"><title>Emma</title><price>4.25</price><stock>0</stock></book>'
        b'<open>true</open>'
        b'</catalog>'
    )
