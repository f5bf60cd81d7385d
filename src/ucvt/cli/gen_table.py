"""ucvt gen-table command."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from ucvt.casefold.generator import DEFAULT_TABLE_PATH, generate_table
from ucvt.cli.exit_codes import ExitCode
from ucvt.config.models import UcvtConfig
from ucvt.exceptions import CaseFoldingFetchError, CaseFoldingParseError

logger = logging.getLogger(__name__)


@click.command("gen-table")
@click.option(
    "--source",
    default=None,
    help="CaseFolding.txt path or URL (default: from config).",
)
@click.option(
    "--from-interpreter",
    is_flag=True,
    default=False,
    help="Use the running Python's Unicode database instead of CaseFolding.txt.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_TABLE_PATH,
    show_default=True,
    help="Where to write the generated table module.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Download timeout in seconds (default: from config).",
)
@click.pass_context
def gen_table_command(
    ctx: click.Context,
    source: str | None,
    from_interpreter: bool,
    output: Path,
    timeout: float | None,
) -> None:
    """Regenerate the case-fold table module.

    Reads Unicode CaseFolding.txt (status C and F mappings) from a file or
    URL, or derives the same mappings from str.casefold, and writes them as
    a Python module of 256 hash buckets.
    """
    if source is not None and from_interpreter:
        raise click.UsageError("--source and --from-interpreter are exclusive.")

    config = ctx.obj if isinstance(ctx.obj, UcvtConfig) else UcvtConfig()
    if timeout is None:
        timeout = config.casefold.timeout_seconds
    if source is None and not from_interpreter:
        source = config.casefold.source

    try:
        count = generate_table(
            output,
            source=source,
            from_interpreter=from_interpreter,
            timeout=timeout,
        )
    except CaseFoldingFetchError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.FETCH_ERROR)
    except CaseFoldingParseError as e:
        click.echo(f"Error: Invalid CaseFolding data: {e}", err=True)
        ctx.exit(ExitCode.PARSE_ERROR)
    except FileNotFoundError as e:
        click.echo(f"Error: File not found: {e.filename}", err=True)
        ctx.exit(ExitCode.INPUT_NOT_FOUND)
    except OSError as e:
        logger.debug("Table generation failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        ctx.exit(ExitCode.OUTPUT_ERROR)

    click.echo(f"Wrote {count} case-fold mappings to {output}")
