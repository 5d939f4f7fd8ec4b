"""Command-line interface for the JSON Transcoder."""

import logging
import sys
import click
from pathlib import Path
from typing import Optional
from . import __version__
from .converter import XMLToJSONConverter
from .types import NS_URI, ConversionConfig, TranscoderError
from .xslt import XSLTPipeline


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )


@click.group()
@click.version_option(version=__version__)
def main():
    """JSON Transcoder - Convert XML to JSON without building a tree."""
    pass


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Output JSON file (default: standard output)')
@click.option('--stylesheet', '-x', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='XSLT stylesheet to apply before serializing')
@click.option('--indent', '-i', type=click.IntRange(min=0), default=None,
              help='Pretty-print with this many spaces per level')
@click.option('--namespace', default=NS_URI, show_default=True,
              help='Namespace URI of the conversion instructions')
@click.option('--ascii', 'ensure_ascii', is_flag=True, help='Escape non-ASCII characters')
@click.option('--profile', is_flag=True, help='Report conversion performance')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def convert(input_file: Path, output: Optional[Path], stylesheet: Optional[Path],
            indent: Optional[int], namespace: str, ensure_ascii: bool,
            profile: bool, verbose: bool):
    """Convert an XML file to JSON."""
    _configure_logging(verbose)

    config = ConversionConfig(
        namespace_uri=namespace,
        indent=indent,
        ensure_ascii=ensure_ascii,
        enable_profiling=profile
    )
    converter = XMLToJSONConverter(config)

    if stylesheet:
        result = converter.transform_file(input_file, stylesheet, output)
    else:
        result = converter.convert_file(input_file, output)

    if not result.success:
        click.echo("❌ Conversion failed:", err=True)
        for error in result.errors or []:
            click.echo(f"   • {error}", err=True)
        sys.exit(1)

    if result.json_string is not None:
        click.echo(result.json_string)
    else:
        click.echo(f"✅ Wrote JSON to {result.output_path}", err=True)

    if result.diagnostics:
        click.echo(f"⚠️  {len(result.diagnostics)} diagnostic(s) reported", err=True)

    if result.metrics:
        metrics = result.metrics
        click.echo(f"📊 {metrics.events_processed} events in {metrics.duration:.3f}s, "
                   f"peak memory {metrics.memory_peak_mb:.1f} MB", err=True)


@main.command('inspect-stylesheet')
@click.argument('stylesheet', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect_stylesheet(stylesheet: Path):
    """Show whether an XSLT stylesheet declares JSON output."""
    try:
        pipeline = XSLTPipeline(stylesheet)
    except TranscoderError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    for name, value in pipeline.output_properties.items():
        click.echo(f"{name}: {value}")
    if pipeline.supports_json():
        click.echo("✅ Output is serialized as JSON")
    else:
        click.echo("Output is serialized as declared by the stylesheet")


if __name__ == '__main__':
    main()
