"""
CSV ingestion for the price board.

Responsibilities:
- encoding detection + decoding of fetched bytes
- delimiter detection (comma vs. semicolon)
- quote-aware tokenizing with blank-line suppression
- header normalization and column resolution
- record building and row validation
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from charset_normalizer import from_bytes

from .errors import MalformedPayload, MissingColumns
from .log import get_logger
from .models import ColumnMap, PriceRecord
from .rules import (
    BOM,
    COMMA,
    FANCY_QUOTES,
    OPTIONAL_COLUMNS,
    QUOTE,
    REQUIRED_COLUMNS,
    SEMICOLON,
    SPREADSHEET_ENCODINGS,
)

Grid = List[List[str]]

log = get_logger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_FANCY_QUOTES_TABLE = str.maketrans(FANCY_QUOTES)


def decode_payload(raw: bytes) -> str:
    """
    Decode fetched CSV bytes to text.

    Rules:
    - Strict UTF-8 first; a UTF-8 BOM is consumed rather than kept as a character.
    - Otherwise charset-normalizer picks among the Western spreadsheet encodings.
    - Last resort is cp1252 with replacement characters, so decoding never fails.
    """
    if not raw:
        return ""

    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    match = from_bytes(raw, cp_isolation=SPREADSHEET_ENCODINGS).best()
    if match is not None:
        try:
            return raw.decode(match.encoding)
        except (UnicodeDecodeError, LookupError):
            pass

    log.warning("payload_decode_fallback", detected=match.encoding if match else None)
    return raw.decode("cp1252", errors="replace")


def detect_delimiter(raw_text: str) -> str:
    """Pick ';' only when it strictly outnumbers ',' on the first non-blank line."""
    first_line = ""
    for line in _LINE_BREAK.split(raw_text or ""):
        if line.strip():
            first_line = line
            break
    if first_line.count(SEMICOLON) > first_line.count(COMMA):
        return SEMICOLON
    return COMMA


def _row_has_content(row: Sequence[str]) -> bool:
    return any(cell.strip() for cell in row)


def tokenize(raw_text: str, delimiter: str = COMMA) -> Grid:
    """
    Split CSV text into rows of cells in one pass.

    Doubled quotes inside a quoted field yield a literal quote. Delimiters and
    line breaks inside quotes are content. Blank lines are dropped. Unbalanced
    quotes never raise: the rest of the input simply stays inside the field.
    """
    grid: Grid = []
    if not raw_text:
        return grid

    row: List[str] = []
    field: List[str] = []
    in_quotes = False
    i = 0
    n = len(raw_text)

    def end_row() -> None:
        row.append("".join(field))
        field.clear()
        if _row_has_content(row):
            grid.append(list(row))
        row.clear()

    while i < n:
        ch = raw_text[i]

        if ch == QUOTE:
            if in_quotes and i + 1 < n and raw_text[i + 1] == QUOTE:
                field.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif in_quotes:
            field.append(ch)
        elif ch == delimiter:
            row.append("".join(field))
            field.clear()
        elif ch == "\n":
            end_row()
        elif ch == "\r":
            if i + 1 < n and raw_text[i + 1] == "\n":
                i += 1
            end_row()
        else:
            field.append(ch)
        i += 1

    if field or row:
        end_row()

    return grid


def normalize_header(cell: Optional[str]) -> str:
    """Canonical lowercase key for a header cell."""
    text = "" if cell is None else str(cell)
    text = text.translate(_FANCY_QUOTES_TABLE)
    text = text.replace(BOM, "")
    text = text.strip().strip(QUOTE)
    text = _WHITESPACE_RUN.sub(" ", text)
    return text.strip().lower()


def resolve_columns(header_row: Sequence[str]) -> ColumnMap:
    """Locate canonical columns by normalized name; first match wins."""
    headers = [normalize_header(cell) for cell in header_row]

    positions: dict[str, int] = {}
    for index, name in enumerate(headers):
        positions.setdefault(name, index)

    missing = [name for name in REQUIRED_COLUMNS if name not in positions]
    if missing:
        raise MissingColumns(missing, headers)

    mapping = {name: positions[name] for name in REQUIRED_COLUMNS}
    for name in OPTIONAL_COLUMNS:
        mapping[name] = positions.get(name)
    return ColumnMap(**mapping)


def _cell(row: Sequence[str], index: Optional[int]) -> str:
    if index is None or index >= len(row):
        return ""
    return (row[index] or "").strip()


def build_records(grid: Sequence[Sequence[str]], column_map: ColumnMap) -> Tuple[PriceRecord, ...]:
    """Turn data rows (everything after the header) into price records."""
    records: List[PriceRecord] = []
    for row in grid[1:]:
        item = _cell(row, column_map.item)
        if not item:
            continue
        records.append(
            PriceRecord(
                item=item,
                kategorie=_cell(row, column_map.kategorie),
                preis=_cell(row, column_map.preis),
                mc_id=_cell(row, column_map.mc_id),
                last_updated=_cell(row, column_map.last_updated),
            )
        )
    return tuple(records)


def parse_price_csv(raw_text: str) -> Tuple[PriceRecord, ...]:
    """Full pipeline: raw CSV text -> validated, ordered price records."""
    delimiter = detect_delimiter(raw_text)
    grid = tokenize(raw_text, delimiter)
    if len(grid) < 2:
        raise MalformedPayload(
            f"Price list is empty or has no data rows ({len(grid)} row(s) found)"
        )

    column_map = resolve_columns(grid[0])
    records = build_records(grid, column_map)
    log.info(
        "price_csv_parsed",
        delimiter=delimiter,
        rows=len(grid) - 1,
        records=len(records),
        dropped=len(grid) - 1 - len(records),
        has_icons=column_map.mc_id is not None,
        has_last_updated=column_map.last_updated is not None,
    )
    return records
