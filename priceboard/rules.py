"""
Deterministic parsing rules.

Canonical column names, delimiters and the glyph tables used by header
normalization live here so the pipeline has no magic strings.
"""

COMMA = ","
SEMICOLON = ";"
QUOTE = '"'
BOM = "\ufeff"

COL_ITEM = "item"
COL_KATEGORIE = "kategorie"
COL_PREIS = "preis"
COL_MC_ID = "mc_id"
COL_LAST_UPDATED = "last_updated"

REQUIRED_COLUMNS = (COL_ITEM, COL_KATEGORIE, COL_PREIS)
OPTIONAL_COLUMNS = (COL_MC_ID, COL_LAST_UPDATED)

# Spreadsheet exports like to "smarten" quotes.
FANCY_QUOTES = {
    "\u201c": '"',
    "\u201d": '"',
    "\u201e": '"',
    "\u201f": '"',
    "\u00ab": '"',
    "\u00bb": '"',
    "\u2033": '"',
    "\uff02": '"',
    "\u2018": "'",
    "\u2019": "'",
    "\u201a": "'",
    "\u201b": "'",
}

ALL_CATEGORIES_LABEL = "Alle Kategorien"
PRICE_SUFFIX = "\U0001fa99"

DEFAULT_ICON_NAMESPACE = "minecraft"
NO_ICON_IDS = ("", "none")

# Candidates for non-UTF-8 spreadsheet exports (Excel "CSV" on Windows).
SPREADSHEET_ENCODINGS = ["cp1252", "latin_1", "iso8859_15"]
