"""--debug comment region dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from native2ascii.codec import to_code_units
from native2ascii.scanner import Region, ScanState

_LABELS = {
    ScanState.CODE: "Code",
    ScanState.MULTI_LINE_COMMENT: "MultiLineComment",
    ScanState.SINGLE_LINE_COMMENT: "SingleLineComment",
}


def dump_regions(source: str, regions: list[Region], *, file: TextIO | None = None) -> None:
    """Print one line per scan region of *source* to *file* (default: stderr)."""
    if file is None:
        file = sys.stderr
    units = to_code_units(source)
    file.write(f"Regions ({len(regions)})\n")
    for region in regions:
        _dump_region(units, region, file)


def _dump_region(units: str, region: Region, f: TextIO) -> None:
    text = units[region.start : region.end]
    escaped = sum(1 for ch in text if ord(ch) > 0x7F) if region.state == ScanState.CODE else 0
    f.write(f"  {_LABELS[region.state]} [{region.start}:{region.end}] {_preview(text)!r}")
    if escaped:
        f.write(f" escapes={escaped}")
    f.write("\n")


def _preview(text: str, limit: int = 40) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
