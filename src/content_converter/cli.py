"""Command-line interface for the Content Converter."""

import asyncio
import logging
import sys
from typing import Optional

import click

from . import __version__
from .codecs import available_formats, detect_format
from .converter import ContentConverter
from .types import UnsupportedFormatError


@click.group()
@click.version_option(version=__version__)
def main():
    """Content Converter - Convert documents between JSON and XML."""
    pass


@main.command()
@click.argument('input_file', type=click.Path(dir_okay=False, allow_dash=True))
@click.argument('output_file', type=click.Path(dir_okay=False, allow_dash=True))
@click.option('--in', '-i', 'in_format', help='Input format (default: inferred from INPUT_FILE suffix)')
@click.option('--out', '-o', 'out_format', help='Output format (default: inferred from OUTPUT_FILE suffix)')
@click.option('--progress-interval', default=5.0, show_default=True,
              help='Seconds between progress messages, 0 to disable')
@click.option('--profile', is_flag=True, help='Log performance metrics')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def convert(input_file: str, output_file: str, in_format: Optional[str], out_format: Optional[str],
            progress_interval: float, profile: bool, verbose: bool):
    """Convert INPUT_FILE into OUTPUT_FILE ("-" for stdin/stdout)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        in_format = in_format or detect_format(input_file)
        out_format = out_format or detect_format(output_file)
    except UnsupportedFormatError as e:
        click.echo(f"❌ Error: {e}. Use --in/--out to name the format.", err=True)
        sys.exit(1)

    converter = ContentConverter(progress_interval=progress_interval, enable_profiling=profile)
    result = asyncio.run(converter.convert(in_format, out_format, input_file, output_file))

    if not result.success:
        click.echo("❌ Conversion failed:", err=True)
        for error in result.errors or []:
            click.echo(f"   • {error}", err=True)
        sys.exit(1)

    click.echo(f"✅ Converted {input_file} ({in_format}) to {output_file} ({out_format}), "
               f"{result.output_size} bytes written", err=output_file == "-")


@main.command()
def formats():
    """List the available formats."""
    for name in available_formats():
        click.echo(name)


if __name__ == '__main__':
    main()
