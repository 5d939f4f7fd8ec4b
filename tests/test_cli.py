"""Tests for the command-line interface."""

import json
from click.testing import CliRunner
from json_transcoder import __version__
from json_transcoder.cli import main


class TestCLI:
    """Tests for the json-transcoder command."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_version(self):
        """Test the version option."""
        result = self.runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_convert_to_stdout(self, sample_xml_file):
        """Test that JSON is printed when no output file is given."""
        result = self.runner.invoke(main, ["convert", str(sample_xml_file)])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["items"] == [{"id": 1}, {"id": 2}]

    def test_convert_to_file(self, sample_xml_file, temp_dir):
        """Test writing JSON to a file with indentation."""
        output = temp_dir / "catalog.json"

        result = self.runner.invoke(main, [
            "convert", str(sample_xml_file), "-o", str(output), "--indent", "2"
        ])

        assert result.exit_code == 0
        text = output.read_text(encoding="utf-8")
        assert text.startswith('{\n  "count": 3')
        assert json.loads(text)["owner"] is None

    def test_convert_with_stylesheet(self, sample_xml_file, json_stylesheet):
        """Test converting through an XSLT stylesheet."""
        result = self.runner.invoke(main, [
            "convert", str(sample_xml_file), "--stylesheet", str(json_stylesheet)
        ])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == [{"id": 1}, {"id": 2}]

    def test_convert_malformed(self, temp_dir):
        """Test that a failed conversion exits with an error."""
        path = temp_dir / "broken.xml"
        path.write_text("<root>", encoding="utf-8")

        result = self.runner.invoke(main, ["convert", str(path)])

        assert result.exit_code == 1
        assert "Conversion failed" in result.output

    def test_convert_missing_input(self, temp_dir):
        """Test that click rejects a missing input file."""
        result = self.runner.invoke(main, ["convert", str(temp_dir / "missing.xml")])

        assert result.exit_code != 0

    def test_convert_reports_diagnostics(self, temp_dir):
        """Test that the number of diagnostics is shown."""
        path = temp_dir / "odd.xml"
        path.write_text(
            '<root xmlns:json="http://pageseeder.org/JSON"><json:array/></root>',
            encoding="utf-8"
        )

        result = self.runner.invoke(main, ["convert", str(path)])

        assert result.exit_code == 0
        assert "1 diagnostic(s) reported" in result.output

    def test_inspect_json_stylesheet(self, json_stylesheet):
        """Test inspecting a stylesheet with JSON output."""
        result = self.runner.invoke(main, ["inspect-stylesheet", str(json_stylesheet)])

        assert result.exit_code == 0
        assert "media-type: application/json" in result.output
        assert "Output is serialized as JSON" in result.output

    def test_inspect_xml_stylesheet(self, xml_stylesheet):
        """Test inspecting a stylesheet with plain XML output."""
        result = self.runner.invoke(main, ["inspect-stylesheet", str(xml_stylesheet)])

        assert result.exit_code == 0
        assert "as declared by the stylesheet" in result.output
