"""Case-fold table generator.

Builds the ``_table`` module read by :func:`ucvt.casefold.lookup.fold` from
either of two sources:

1. CaseFolding.txt from the Unicode Character Database, as a local file or
   downloaded from unicode.org. Status C (common) and F (full) mappings are
   kept; S (simple) and T (Turkic) mappings are skipped.
2. The running interpreter's own Unicode database through ``str.casefold``,
   which implements the same C + F folding.

The rendered module is plain Python data, so loading it costs nothing beyond
an import.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import httpx

from ucvt.casefold.lookup import HASH_BUCKETS, bucket_index
from ucvt.codec.types import MAX_CODEPOINT
from ucvt.exceptions import CaseFoldingFetchError, CaseFoldingParseError

logger = logging.getLogger(__name__)

# Must match UNICODE_VERSION of the shipped _table module.
CASEFOLDING_VERSION = "14.0.0"
CASEFOLDING_URL = (
    f"https://www.unicode.org/Public/{CASEFOLDING_VERSION}/ucd/CaseFolding.txt"
)

DEFAULT_TABLE_PATH = Path(__file__).with_name("_table.py")

# Statuses that make up full case folding.
_KEPT_STATUSES = frozenset({"C", "F"})
_SKIPPED_STATUSES = frozenset({"S", "T"})

_VERSION_PATTERN = re.compile(r"CaseFolding-(\d+\.\d+\.\d+)\.txt")

# Codepoints checked per block when scanning the interpreter's database.
_SCAN_BLOCK = 256

Row = tuple[int, int, int, int]
Buckets = tuple[tuple[Row, ...], ...]


@dataclass(frozen=True)
class FoldMapping:
    """One case-fold mapping.

    Attributes:
        source: The codepoint being folded.
        targets: One to three folded codepoints.
    """

    source: int
    targets: tuple[int, ...]

    def as_row(self) -> Row:
        """Return the mapping as a fixed-width (from, to0, to1, to2) row."""
        padded = self.targets + (0,) * (3 - len(self.targets))
        return (self.source, padded[0], padded[1], padded[2])


@dataclass(frozen=True)
class CaseFoldingData:
    """Parsed case-fold mappings and the Unicode version they belong to."""

    mappings: tuple[FoldMapping, ...]
    unicode_version: str | None


def _parse_codepoint(text: str, line_number: int, line: str) -> int:
    try:
        value = int(text, 16)
    except ValueError:
        raise CaseFoldingParseError(
            line_number, line, f"invalid codepoint {text!r}"
        ) from None
    if value > MAX_CODEPOINT:
        raise CaseFoldingParseError(line_number, line, f"codepoint {text} out of range")
    return value


def parse_case_folding(lines: Iterable[str]) -> CaseFoldingData:
    """Parse the lines of a CaseFolding.txt file.

    Data lines look like ``00DF; F; 0073 0073; # LATIN SMALL LETTER SHARP S``.
    The version is taken from the ``# CaseFolding-X.Y.Z.txt`` header when
    present.

    Args:
        lines: Lines of the file, with or without trailing newlines.

    Returns:
        Parsed mappings in file order.

    Raises:
        CaseFoldingParseError: If a data line is malformed, has an unknown
            status, maps to more than three codepoints, or repeats a
            codepoint already mapped.
    """
    mappings: list[FoldMapping] = []
    seen: set[int] = set()
    version: str | None = None

    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        data, _, comment = line.partition("#")

        if version is None:
            match = _VERSION_PATTERN.search(comment)
            if match:
                version = match.group(1)

        if not data.strip():
            continue

        fields = [field.strip() for field in data.split(";")]
        if len(fields) < 3:
            raise CaseFoldingParseError(line_number, line, "expected 3 fields")

        code, status, mapping = fields[0], fields[1], fields[2]
        if status in _SKIPPED_STATUSES:
            continue
        if status not in _KEPT_STATUSES:
            raise CaseFoldingParseError(line_number, line, f"unknown status {status!r}")

        source = _parse_codepoint(code, line_number, line)
        targets = tuple(
            _parse_codepoint(part, line_number, line) for part in mapping.split()
        )
        if not targets:
            raise CaseFoldingParseError(line_number, line, "empty mapping")
        if len(targets) > 3:
            raise CaseFoldingParseError(
                line_number, line, f"mapping has {len(targets)} codepoints, max 3"
            )
        if source in seen:
            raise CaseFoldingParseError(
                line_number, line, f"duplicate mapping for U+{source:04X}"
            )

        seen.add(source)
        mappings.append(FoldMapping(source, targets))

    logger.debug(
        "Parsed %d case-fold mappings (Unicode %s)",
        len(mappings),
        version,
        extra={"mapping_count": len(mappings), "unicode_version": version},
    )
    return CaseFoldingData(tuple(mappings), version)


def mappings_from_interpreter() -> CaseFoldingData:
    """Derive case-fold mappings from ``str.casefold``.

    Whole blocks whose casefolded text is unchanged are skipped, so only the
    few blocks containing cased letters are examined codepoint by codepoint.

    Returns:
        Mappings in codepoint order, tagged with ``unicodedata.unidata_version``.
    """
    mappings: list[FoldMapping] = []
    for base in range(0, MAX_CODEPOINT + 1, _SCAN_BLOCK):
        block = "".join(map(chr, range(base, base + _SCAN_BLOCK)))
        if block.casefold() == block:
            continue
        for char in block:
            folded = char.casefold()
            if folded != char:
                mappings.append(FoldMapping(ord(char), tuple(map(ord, folded))))

    logger.debug(
        "Derived %d case-fold mappings from interpreter (Unicode %s)",
        len(mappings),
        unicodedata.unidata_version,
        extra={
            "mapping_count": len(mappings),
            "unicode_version": unicodedata.unidata_version,
        },
    )
    return CaseFoldingData(tuple(mappings), unicodedata.unidata_version)


def fetch_case_folding(url: str = CASEFOLDING_URL, timeout: float = 30.0) -> str:
    """Download CaseFolding.txt.

    Args:
        url: Location of the file.
        timeout: Request timeout in seconds.

    Returns:
        The file contents.

    Raises:
        CaseFoldingFetchError: On connection, timeout or HTTP status errors.
    """
    logger.info("Fetching %s", url)
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        raise CaseFoldingFetchError(url, f"timed out after {timeout}s") from e
    except httpx.HTTPStatusError as e:
        raise CaseFoldingFetchError(
            url, f"HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise CaseFoldingFetchError(url, str(e)) from e
    return response.text


def load_case_folding(source: str, timeout: float = 30.0) -> CaseFoldingData:
    """Load and parse CaseFolding.txt from a URL or a local path."""
    if source.startswith(("http://", "https://")):
        text = fetch_case_folding(source, timeout=timeout)
    else:
        text = Path(source).expanduser().read_text(encoding="utf-8")
    return parse_case_folding(text.splitlines())


def build_buckets(mappings: Iterable[FoldMapping]) -> Buckets:
    """Group mappings into hash buckets, each sorted by source codepoint."""
    buckets: list[list[Row]] = [[] for _ in range(HASH_BUCKETS)]
    for mapping in mappings:
        buckets[bucket_index(mapping.source)].append(mapping.as_row())
    return tuple(tuple(sorted(bucket)) for bucket in buckets)


def render_table_module(
    buckets: Buckets,
    unicode_version: str | None,
    source_description: str,
) -> str:
    """Render the bucket table as the source of the ``_table`` module."""
    version = unicode_version or "unknown"
    out = [
        '"""Case-fold hash table.',
        "",
        f"Generated by ``ucvt gen-table`` from {source_description}.",
        "Do not edit by hand.",
        '"""',
        "",
        f'UNICODE_VERSION = "{version}"',
        "",
        "# Each bucket lists (from, to0, to1, to2) rows sorted by from. The bucket",
        "# index is (from ^ (from >> 8)) & 0xFF. Unused targets are 0.",
        "CASE_FOLD_BUCKETS: tuple[tuple[tuple[int, int, int, int], ...], ...] = (",
    ]
    for index, bucket in enumerate(buckets):
        out.append(f"    # 0x{index:02X}")
        if not bucket:
            out.append("    (),")
            continue
        out.append("    (")
        for source, to0, to1, to2 in bucket:
            out.append(
                f"        (0x{source:04X}, 0x{to0:04X}, 0x{to1:04X}, 0x{to2:04X}),"
            )
        out.append("    ),")
    out.append(")")
    return "\n".join(out) + "\n"


def generate_table(
    output: Path = DEFAULT_TABLE_PATH,
    *,
    source: str | None = None,
    from_interpreter: bool = False,
    timeout: float = 30.0,
) -> int:
    """Generate the case-fold table module and write it to ``output``.

    Args:
        output: Destination path for the rendered module.
        source: CaseFolding.txt path or URL. Defaults to CASEFOLDING_URL.
        from_interpreter: Derive mappings from ``str.casefold`` instead of
            reading CaseFolding.txt.
        timeout: Download timeout in seconds.

    Returns:
        Number of mappings written.
    """
    if from_interpreter:
        data = mappings_from_interpreter()
        description = f"the Python {unicodedata.unidata_version} Unicode database"
    else:
        source = source or CASEFOLDING_URL
        data = load_case_folding(source, timeout=timeout)
        description = source

    buckets = build_buckets(data.mappings)
    output.write_text(
        render_table_module(buckets, data.unicode_version, description),
        encoding="utf-8",
    )
    longest = max((len(bucket) for bucket in buckets), default=0)
    logger.info(
        "Wrote %d case-fold mappings to %s (longest bucket: %d)",
        len(data.mappings),
        output,
        longest,
        extra={
            "mapping_count": len(data.mappings),
            "longest_bucket": longest,
            "unicode_version": data.unicode_version,
        },
    )
    return len(data.mappings)
