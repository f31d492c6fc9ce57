from __future__ import annotations
import json
import math
import re
from typing import Any, Dict, List

import pandas as pd

from workflows.prospect_research.errors import InvalidModelOutput
from workflows.prospect_research.schema import (
    DEFAULT_STATUS,
    HEADERS,
    MAX_CELL_CHARS,
    PRIORITY_COL,
    STATUS_COL,
    ProspectRow,
)

INVALID_JSON_MSG = "Gemini non ha restituito JSON valido. Riprova."

_FENCE_OPEN_RE = re.compile(r"```json\s*", re.IGNORECASE)
_FENCE_RE = re.compile(r"```\s*")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", _FENCE_OPEN_RE.sub("", text or "")).strip()


def extract_json_object(text: str) -> Dict[str, Any]:
    """Decode the outermost {...} span of a model reply, ignoring any prose around it."""
    cleaned = strip_code_fences(text)
    m = _OBJECT_RE.search(cleaned)
    if not m:
        raise InvalidModelOutput(INVALID_JSON_MSG)
    try:
        return json.loads(m.group(0))
    except ValueError as e:
        raise InvalidModelOutput(INVALID_JSON_MSG) from e


def _cell_to_str(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, str):
        s = v
    elif isinstance(v, (list, tuple)):
        s = ", ".join(_cell_to_str(x) for x in v)
    elif isinstance(v, dict):
        s = json.dumps(v, ensure_ascii=False)
    elif isinstance(v, float):
        if math.isnan(v):
            return ""
        s = str(int(v)) if v.is_integer() else str(v)
    else:
        s = str(v)
    return s[:MAX_CELL_CHARS]


def normalize_companies(companies: List[Any]) -> List[ProspectRow]:
    """Force every record onto the sheet schema: all headers present, all values strings."""
    records = [c for c in companies if isinstance(c, dict)]
    if not records:
        return []

    # object dtype keeps ints as ints when a column also has gaps
    df = pd.DataFrame(records, dtype=object).reindex(columns=HEADERS)
    df = df.map(_cell_to_str)

    df[PRIORITY_COL] = df[PRIORITY_COL].str.strip().str.upper()
    df[STATUS_COL] = df[STATUS_COL].where(df[STATUS_COL].str.strip() != "", DEFAULT_STATUS)

    return df.to_dict(orient="records")


def parse_companies(text: str) -> List[ProspectRow]:
    data = extract_json_object(text)
    companies = data.get("companies") if isinstance(data, dict) else None
    if companies is None:
        return []
    if not isinstance(companies, list):
        raise InvalidModelOutput(INVALID_JSON_MSG)
    return normalize_companies(companies)
