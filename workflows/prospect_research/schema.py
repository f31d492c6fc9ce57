from __future__ import annotations
from typing import Dict, Iterable, List

# Column order of the prospect sheet; also the JSON keys the model must return.
HEADERS = [
    "Nome Azienda", "Città", "Indirizzo", "Telefono", "Email", "Sito Web",
    "Tipo", "Marchi Concorrenti Usati", "Servizi Offerti", "Mercato Target",
    "Priorità", "Note Commerciali", "Nome Contatto", "Stato",
]

PRIORITY_COL = "Priorità"
STATUS_COL = "Stato"
DEFAULT_STATUS = "Da contattare"

PRIORITY_TIERS = ("ALTA", "MEDIA", "BASSA")

# Sheets API colours are 0..1 floats
PRIORITY_COLORS: Dict[str, Dict[str, float]] = {
    "ALTA":  {"red": 0.776, "green": 0.937, "blue": 0.808},
    "MEDIA": {"red": 1.0,   "green": 0.953, "blue": 0.702},
    "BASSA": {"red": 1.0,   "green": 0.780, "blue": 0.788},
}

HEADER_BG = {"red": 0.122, "green": 0.286, "blue": 0.490}
HEADER_TEXT = {"red": 1.0, "green": 1.0, "blue": 1.0}
COL_WIDTHS = [220, 140, 230, 140, 230, 200, 160, 280, 320, 220, 80, 400, 140, 120]
DATA_ROW_HEIGHT = 90

# Google Sheets rejects cells above 50k chars
MAX_CELL_CHARS = 49000

ProspectRow = Dict[str, str]


def count_priorities(rows: Iterable[ProspectRow]) -> Dict[str, int]:
    """Tally rows per priority tier. Rows outside the three tiers are not counted."""
    counts = {tier: 0 for tier in PRIORITY_TIERS}
    for row in rows:
        p = row.get(PRIORITY_COL, "")
        if p in counts:
            counts[p] += 1
    return counts


def to_values(rows: List[ProspectRow]) -> List[List[str]]:
    """Header row followed by one list of cell values per prospect."""
    return [list(HEADERS)] + [[row.get(h, "") for h in HEADERS] for row in rows]
