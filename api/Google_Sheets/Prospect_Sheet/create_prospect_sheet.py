from __future__ import annotations
from typing import Dict, List, Optional

import gspread
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError

from integrations.google_auth import drive_service, load_google_credentials, sheets_client
from workflows.prospect_research.errors import SheetPublishError
from workflows.prospect_research.logger import get_logger
from workflows.prospect_research.schema import (
    COL_WIDTHS,
    DATA_ROW_HEIGHT,
    HEADER_BG,
    HEADER_TEXT,
    HEADERS,
    PRIORITY_COL,
    PRIORITY_COLORS,
    ProspectRow,
    to_values,
)

logger = get_logger()

# === CONFIG ===
WORKSHEET_NAME = "Prospect"
SHEET_URL = "https://docs.google.com/spreadsheets/d/{spreadsheet_id}"


def sheet_title(area: str, country: str) -> str:
    if country:
        return f"IREX Prospect {country} – {area}"
    return f"IREX Prospect {area}"


def _row_range(sheet_id: int, start_row: int, end_row: int, n_cols: int) -> Dict:
    return {
        "sheetId": sheet_id,
        "startRowIndex": start_row,
        "endRowIndex": end_row,
        "startColumnIndex": 0,
        "endColumnIndex": n_cols,
    }


def build_format_requests(rows: List[ProspectRow], sheet_id: int = 0) -> List[Dict]:
    """Sheets API batchUpdate requests: styled header, priority colours, frozen header, sizes, filter."""
    n_cols = len(HEADERS)
    n_rows = len(rows)
    requests: List[Dict] = []

    # Header row style
    requests.append({
        "repeatCell": {
            "range": _row_range(sheet_id, 0, 1, n_cols),
            "cell": {
                "userEnteredFormat": {
                    "backgroundColor": HEADER_BG,
                    "textFormat": {"bold": True, "foregroundColor": HEADER_TEXT, "fontSize": 10},
                    "horizontalAlignment": "CENTER",
                    "verticalAlignment": "MIDDLE",
                    "wrapStrategy": "WRAP",
                },
            },
            "fields": "userEnteredFormat(backgroundColor,textFormat,horizontalAlignment,verticalAlignment,wrapStrategy)",
        },
    })

    # Priority colours, data rows start at index 1
    for idx, row in enumerate(rows, start=1):
        color = PRIORITY_COLORS.get(row.get(PRIORITY_COL, ""))
        if not color:
            continue
        requests.append({
            "repeatCell": {
                "range": _row_range(sheet_id, idx, idx + 1, n_cols),
                "cell": {
                    "userEnteredFormat": {
                        "backgroundColor": color,
                        "verticalAlignment": "TOP",
                        "wrapStrategy": "WRAP",
                    },
                },
                "fields": "userEnteredFormat(backgroundColor,verticalAlignment,wrapStrategy)",
            },
        })

    requests.append({
        "updateSheetProperties": {
            "properties": {"sheetId": sheet_id, "gridProperties": {"frozenRowCount": 1}},
            "fields": "gridProperties.frozenRowCount",
        },
    })

    for col_idx, width in enumerate(COL_WIDTHS):
        requests.append({
            "updateDimensionProperties": {
                "range": {"sheetId": sheet_id, "dimension": "COLUMNS", "startIndex": col_idx, "endIndex": col_idx + 1},
                "properties": {"pixelSize": width},
                "fields": "pixelSize",
            },
        })

    # An empty dimension range is rejected by the API
    if n_rows:
        requests.append({
            "updateDimensionProperties": {
                "range": {"sheetId": sheet_id, "dimension": "ROWS", "startIndex": 1, "endIndex": n_rows + 1},
                "properties": {"pixelSize": DATA_ROW_HEIGHT},
                "fields": "pixelSize",
            },
        })

    requests.append({
        "setBasicFilter": {
            "filter": {"range": _row_range(sheet_id, 0, n_rows + 1, n_cols)},
        },
    })
    return requests


def create_prospect_sheet(
    area: str,
    country: str,
    rows: List[ProspectRow],
    gc: Optional[gspread.Client] = None,
    drive=None,
) -> str:
    """Create, fill, format and publicly share a prospect sheet. Returns its link."""
    if gc is None or drive is None:
        creds = load_google_credentials()
        gc = gc or sheets_client(creds)
        drive = drive or drive_service(creds)

    title = sheet_title(area, country)
    try:
        sh = gc.create(title)
        ws = sh.sheet1
        ws.update_title(WORKSHEET_NAME)
        logger.info(f"🆕 Created spreadsheet '{title}' ({sh.id})")

        sh.values_update(
            f"{WORKSHEET_NAME}!A1",
            params={"valueInputOption": "RAW"},
            body={"values": to_values(rows)},
        )
        logger.info(f"✏️ Wrote header + {len(rows)} prospect rows")

        sh.batch_update({"requests": build_format_requests(rows, sheet_id=ws.id)})
        logger.info("🎨 Formatting applied")

        # anyone with the link can view
        drive.permissions().create(
            fileId=sh.id,
            body={"type": "anyone", "role": "reader"},
        ).execute()
        logger.info("🔗 Shared with anyone who has the link")
    except (gspread.exceptions.GSpreadException, HttpError, GoogleAuthError) as e:
        logger.exception("❌ Error publishing prospect sheet.")
        raise SheetPublishError(f"Errore durante la creazione del Google Sheet: {e}") from e

    return SHEET_URL.format(spreadsheet_id=sh.id)
