#!/usr/bin/env python3
"""
Example usage of the JSON Transcoder.

This script converts an annotated XML document to JSON, once into a
string and once into a file.
"""

import json
import tempfile
from pathlib import Path
from json_transcoder import ConversionConfig, XMLToJSONConverter


SAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<library xmlns:json="http://pageseeder.org/JSON"
         json:string="name" json:number="founded">
  <name>City Library</name>
  <founded>1892</founded>
  <json:array json:name="books">
    <book isbn="978-0141439518" json:number="year price" json:boolean="available">
      <year>1813</year>
      <price>8.99</price>
      <available>true</available>
      <title lang="en">Pride and Prejudice</title>
    </book>
    <book isbn="978-0451524935" json:number="year price" json:boolean="available">
      <year>1949</year>
      <price>9.5</price>
      <available>maybe</available>
    </book>
  </json:array>
  <json:null json:name="director"/>
</library>
"""


def main():
    """Main example function."""
    print("JSON Transcoder Example")
    print("=" * 50)
    print(f"Input XML size: {len(SAMPLE_XML)} characters\n")

    converter = XMLToJSONConverter(ConversionConfig(indent=2, enable_profiling=True))

    result = converter.convert_string(SAMPLE_XML, system_id="library.xml")
    if not result.success:
        print("❌ Conversion failed")
        for error in result.errors or []:
            print(f"   Error: {error}")
        return

    print("✅ Success!")
    print(result.json_string)

    if result.diagnostics:
        print(f"\nDiagnostics ({len(result.diagnostics)}):")
        for diagnostic in result.diagnostics:
            print(f"   {diagnostic.type.value}: {diagnostic.message}")

    if result.metrics:
        print(f"\nEvents processed: {result.metrics.events_processed}")
        print(f"Duration: {result.metrics.duration:.4f}s")

    with tempfile.TemporaryDirectory() as temp_dir:
        input_path = Path(temp_dir) / "library.xml"
        output_path = Path(temp_dir) / "json" / "library.json"
        input_path.write_text(SAMPLE_XML, encoding="utf-8")

        result = converter.convert_file(input_path, output_path)
        if result.success:
            data = json.loads(output_path.read_text(encoding="utf-8"))
            print(f"\nWrote {result.output_path}")
            print(f"   Books: {len(data['books'])}")

    summary = converter.profiler.get_performance_summary()
    print(f"\nConversions profiled: {summary['total_operations']}")
    print(f"   Total events: {summary['total_events']}")
    print(f"   Total duration: {summary['total_duration']:.4f}s")


if __name__ == "__main__":
    main()
