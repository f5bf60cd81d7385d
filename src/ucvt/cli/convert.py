"""ucvt convert command.

Converts a file between UTF-8 and one of the fixed-width forms by running
the matching bulk converter over a destination sized for the worst case.
"""

from __future__ import annotations

import logging
import sys
from array import array
from collections.abc import Callable, Sequence
from pathlib import Path

import click

from ucvt.cli.exit_codes import ExitCode
from ucvt.codec import (
    utf8_from_latin1,
    utf8_from_ucs2,
    utf8_from_ucs4,
    utf8_from_utf16,
    utf8_to_ucs2,
    utf8_to_ucs4,
    utf8_to_utf16,
)
from ucvt.logging import conversion_context

logger = logging.getLogger(__name__)

Converter = Callable[..., int]

ENCODINGS = ("utf8", "ucs4", "ucs2", "utf16", "latin1")

# array typecodes for the wide forms
_TYPECODES: dict[str, str] = {"ucs4": "I", "ucs2": "H", "utf16": "H"}

_TO_WIDE: dict[str, Converter] = {
    "ucs4": utf8_to_ucs4,
    "ucs2": utf8_to_ucs2,
    "utf16": utf8_to_utf16,
}

_FROM_WIDE: dict[str, Converter] = {
    "ucs4": utf8_from_ucs4,
    "ucs2": utf8_from_ucs2,
    "utf16": utf8_from_utf16,
    "latin1": utf8_from_latin1,
}

# Most UTF-8 bytes one source unit can turn into.
_UTF8_BYTES_PER_UNIT: dict[str, int] = {"ucs4": 4, "ucs2": 3, "utf16": 3, "latin1": 2}


def _unpack(data: bytes, typecode: str, byte_order: str) -> array:
    units = array(typecode)
    if len(data) % units.itemsize:
        raise ValueError(
            f"input length {len(data)} is not a multiple of {units.itemsize} bytes"
        )
    units.frombytes(data)
    if byte_order != sys.byteorder:
        units.byteswap()
    return units


def _pack(units: array, count: int, byte_order: str) -> bytes:
    out = units[:count]
    if byte_order != sys.byteorder:
        out.byteswap()
    return out.tobytes()


def convert_bytes(
    data: bytes, source_encoding: str, target_encoding: str, byte_order: str
) -> tuple[bytes, int]:
    """Convert raw file contents between two encodings.

    Args:
        data: Source file contents.
        source_encoding: One of ENCODINGS.
        target_encoding: One of ENCODINGS. Exactly one side must be utf8.
        byte_order: "little" or "big", for the wide side.

    Returns:
        Tuple of (converted bytes, number of destination units written).

    Raises:
        ValueError: If the encoding pair is unsupported or the input length
            does not fit the source unit size.
    """
    if source_encoding == "utf8" and target_encoding in _TO_WIDE:
        dst = array(_TYPECODES[target_encoding], [0]) * (len(data) + 1)
        count = _TO_WIDE[target_encoding](data, dst, None)
        return _pack(dst, count, byte_order), count

    if target_encoding == "utf8" and source_encoding in _FROM_WIDE:
        if source_encoding == "latin1":
            src: Sequence[int] = data
        else:
            src = _unpack(data, _TYPECODES[source_encoding], byte_order)
        out = bytearray(len(src) * _UTF8_BYTES_PER_UNIT[source_encoding] + 1)
        count = _FROM_WIDE[source_encoding](src, out, None)
        return bytes(out[:count]), count

    raise ValueError(f"cannot convert {source_encoding} to {target_encoding}")


@click.command("convert")
@click.option(
    "--from",
    "source_encoding",
    type=click.Choice(ENCODINGS),
    required=True,
    help="Encoding of INPUT.",
)
@click.option(
    "--to",
    "target_encoding",
    type=click.Choice(ENCODINGS[:-1]),
    required=True,
    help="Encoding of OUTPUT.",
)
@click.option(
    "--byte-order",
    type=click.Choice(["little", "big"]),
    default="little",
    show_default=True,
    help="Byte order of the UCS-2, UCS-4 or UTF-16 side.",
)
@click.argument("input_path", type=click.Path(path_type=Path, dir_okay=False))
@click.argument("output_path", type=click.Path(path_type=Path, dir_okay=False))
@click.pass_context
def convert_command(
    ctx: click.Context,
    source_encoding: str,
    target_encoding: str,
    byte_order: str,
    input_path: Path,
    output_path: Path,
) -> None:
    """Convert INPUT_PATH to OUTPUT_PATH.

    One side must be utf8; latin1 is only accepted as a source. Conversion
    stops at the first zero unit. Malformed or unrepresentable characters
    are written as '?'.
    """
    if (source_encoding == "utf8") == (target_encoding == "utf8"):
        raise click.UsageError("Exactly one of --from and --to must be utf8.")

    if not input_path.exists():
        click.echo(f"Error: File not found: {input_path}", err=True)
        ctx.exit(ExitCode.INPUT_NOT_FOUND)

    try:
        with conversion_context(source_encoding, target_encoding, input_path):
            payload, count = convert_bytes(
                input_path.read_bytes(), source_encoding, target_encoding, byte_order
            )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.INPUT_INVALID)

    try:
        output_path.write_bytes(payload)
    except OSError as e:
        click.echo(f"Error: Cannot write {output_path}: {e}", err=True)
        ctx.exit(ExitCode.OUTPUT_ERROR)

    logger.info(
        "Converted %s (%s) to %s (%s): %d units",
        input_path,
        source_encoding,
        output_path,
        target_encoding,
        count,
        extra={
            "conversion": f"{source_encoding}->{target_encoding}",
            "input_path": str(input_path),
            "units_written": count,
        },
    )
    click.echo(f"Wrote {count} {target_encoding} units to {output_path}")
