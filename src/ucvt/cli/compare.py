"""ucvt compare command."""

import click

from ucvt.cli.exit_codes import ExitCode
from ucvt.compare import (
    ascii_compare_ci,
    ascii_compare_ci_n,
    utf8_compare_ci,
    utf8_compare_ci_n,
)


def _to_bytes(text: str) -> bytes:
    # surrogateescape keeps undecodable argv bytes intact
    return text.encode("utf-8", errors="surrogateescape")


@click.command("compare")
@click.argument("first")
@click.argument("second")
@click.option(
    "--ascii",
    "ascii_only",
    is_flag=True,
    help="Fold only A-Z and compare bytes without decoding UTF-8.",
)
@click.option(
    "-n",
    "--max",
    "limit",
    type=click.IntRange(min=0),
    default=None,
    help="Compare at most N codepoints (bytes with --ascii).",
)
@click.pass_context
def compare_command(
    ctx: click.Context, first: str, second: str, ascii_only: bool, limit: int | None
) -> None:
    """Compare FIRST and SECOND ignoring case.

    Prints -1, 0 or 1. Exits 0 when the strings are equal and 1 otherwise.
    """
    str1 = _to_bytes(first)
    str2 = _to_bytes(second)

    if ascii_only:
        if limit is None:
            result = ascii_compare_ci(str1, str2)
        else:
            result = ascii_compare_ci_n(str1, str2, limit)
    elif limit is None:
        result = utf8_compare_ci(str1, str2)
    else:
        result = utf8_compare_ci_n(str1, str2, limit)

    click.echo(str(result))
    ctx.exit(ExitCode.SUCCESS if result == 0 else ExitCode.STRINGS_DIFFER)
