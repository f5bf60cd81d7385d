"""ucvt fold command."""

import click

from ucvt.casefold import fold_expansion
from ucvt.codec.types import MAX_CODEPOINT


def parse_codepoint(text: str) -> int:
    """Parse ``U+00DF``, ``0xDF``, ``DF`` or a single character.

    Raises:
        ValueError: If the text is not a codepoint in range.
    """
    if text[:2].upper() in ("U+", "0X"):
        value = int(text[2:], 16)
    elif len(text) == 1:
        value = ord(text)
    else:
        value = int(text, 16)
    if not 0 <= value <= MAX_CODEPOINT:
        raise ValueError(f"codepoint {text} out of range")
    return value


def format_codepoint(cp: int) -> str:
    return f"U+{cp:04X}"


@click.command("fold")
@click.argument("codepoints", nargs=-1, required=True)
def fold_command(codepoints: tuple[str, ...]) -> None:
    """Show the case folding of each CODEPOINT.

    Accepts U+XXXX, 0xXXXX, bare hex or a single character.
    """
    for text in codepoints:
        try:
            cp = parse_codepoint(text)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="CODEPOINTS") from e
        targets = " ".join(format_codepoint(t) for t in fold_expansion(cp))
        click.echo(f"{format_codepoint(cp)} -> {targets}")
