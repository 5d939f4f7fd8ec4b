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
def sample_xml():
    """Document using type declarations, arrays and nulls."""
    return (
        '<catalog xmlns:json="http://pageseeder.org/JSON" '
        'json:number="count" json:boolean="active">'
        '<count>3</count>'
        '<active>true</active>'
        '<json:array json:name="items">'
        '<item id="1" json:number="id"/>'
        '<item id="2" json:number="id"/>'
        '</json:array>'
        '<json:null json:name="owner"/>'
        '</catalog>'
    )


@pytest.fixture
def sample_xml_file(temp_dir, sample_xml):
    """Sample document written to a file."""
    path = temp_dir / "catalog.xml"
    path.write_text(sample_xml, encoding="utf-8")
    return path


@pytest.fixture
def json_stylesheet(temp_dir):
    """Stylesheet declaring JSON output, wrapping the input in an array."""
    path = temp_dir / "to-json.xsl"
    path.write_text(
        '<xsl:stylesheet version="1.0" '
        'xmlns:xsl="http://www.w3.org/1999/XSL/Transform" '
        'xmlns:json="http://pageseeder.org/JSON">'
        '<xsl:output method="xml" media-type="application/json"/>'
        '<xsl:template match="/">'
        '<json:array>'
        '<xsl:for-each select="//item">'
        '<entry json:number="id"><xsl:copy-of select="@id"/></entry>'
        '</xsl:for-each>'
        '</json:array>'
        '</xsl:template>'
        '</xsl:stylesheet>',
        encoding="utf-8"
    )
    return path


@pytest.fixture
def xml_stylesheet(temp_dir):
    """Stylesheet with plain XML output."""
    path = temp_dir / "to-xml.xsl"
    path.write_text(
        '<xsl:stylesheet version="1.0" '
        'xmlns:xsl="http://www.w3.org/1999/XSL/Transform">'
        '<xsl:output method="xml" omit-xml-declaration="yes"/>'
        '<xsl:template match="/">'
        '<total><xsl:value-of select="count(//item)"/></total>'
        '</xsl:template>'
        '</xsl:stylesheet>',
        encoding="utf-8"
    )
    return path
