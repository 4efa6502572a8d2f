"""
CLI tool to decode Plessey barcodes from binarized images or bit strings.

Usage:
    python -m tools.scan.main decode scan.png --row 40
    python -m tools.scan.main decode scan.png --all-rows --normalize
    python -m tools.scan.main bits 000011110000...
    python -m tools.scan.main render 314159 out.png --module 4
"""

import sys
from pathlib import Path

import click
import numpy as np
import structlog
from PIL import Image

from plessey.barcode import PlesseyDecoder, encode_row
from plessey.config import configure_logging, get_settings
from plessey.models import DecodeResult

logger = structlog.get_logger(__name__)

# Pixels darker than this are bars; images are expected to be binarized already
DARK_THRESHOLD = 128


def load_rows(image_path: Path) -> np.ndarray:
    """Load an image as a 2D boolean array (True = bar)."""
    with Image.open(image_path) as image:
        gray = np.asarray(image.convert("L"))
    return gray < DARK_THRESHOLD


def parse_bits(bits: str) -> np.ndarray:
    """Parse a string of 0/1 characters, ignoring whitespace."""
    cleaned = "".join(bits.split())
    invalid = set(cleaned) - {"0", "1"}
    if invalid:
        raise click.BadParameter(f"Unexpected characters: {''.join(sorted(invalid))}")
    return np.array([c == "1" for c in cleaned], dtype=bool)


def format_result(result: DecodeResult, row_index: int | None = None) -> str:
    """Format a decode result as a single line."""
    prefix = f"row {row_index}: " if row_index is not None else ""
    return f"{prefix}{result.code} [{result.start}:{result.end}]"


def build_decoder(normalize: bool) -> PlesseyDecoder:
    return PlesseyDecoder(normalize_bar_space_width=True if normalize else None)


@click.group()
def cli() -> None:
    """Plessey barcode scan line decoder."""
    configure_logging(get_settings())


@cli.command()
@click.argument(
    "image",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--row", "-r", "row_index", type=int, default=None, help="Row to scan (default: middle)")
@click.option("--all-rows", is_flag=True, help="Scan every row and report each decode")
@click.option("--normalize", is_flag=True, help="Correct bar/space width skew")
def decode(image: Path, row_index: int | None, all_rows: bool, normalize: bool) -> None:
    """Decode a Plessey barcode from a binarized image."""
    rows = load_rows(image)
    decoder = build_decoder(normalize)

    if all_rows:
        indices = list(range(rows.shape[0]))
    else:
        index = rows.shape[0] // 2 if row_index is None else row_index
        if not 0 <= index < rows.shape[0]:
            raise click.BadParameter(f"Row {index} outside image height {rows.shape[0]}")
        indices = [index]

    found = 0
    for index in indices:
        result = decoder.decode(rows[index])
        if result is None:
            continue
        found += 1
        click.echo(format_result(result, index if all_rows else None))

    logger.info("Scan complete", image=str(image), rows=len(indices), decoded=found)

    if not found:
        click.echo("No Plessey barcode found", err=True)
        sys.exit(1)


@cli.command("bits")
@click.argument("bits")
@click.option("--normalize", is_flag=True, help="Correct bar/space width skew")
def decode_bits(bits: str, normalize: bool) -> None:
    """Decode a row given as a string of 0 (space) and 1 (bar) pixels."""
    row = parse_bits(bits)
    result = build_decoder(normalize).decode(row)
    if result is None:
        click.echo("No Plessey barcode found", err=True)
        sys.exit(1)
    click.echo(format_result(result))


@cli.command()
@click.argument("payload")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--module", "-m", type=int, default=4, help="Pixels per narrow unit")
@click.option("--height", type=int, default=60, help="Image height in pixels")
def render(payload: str, output: Path, module: int, height: int) -> None:
    """Render a synthetic Plessey barcode image."""
    try:
        row = encode_row(payload, module=module)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    pixels = np.where(row, 0, 255).astype(np.uint8)
    Image.fromarray(np.tile(pixels, (height, 1))).save(output)
    click.echo(f"Barcode written to: {output}")


if __name__ == "__main__":
    cli()
