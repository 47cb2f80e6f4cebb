# backend/storefront/services/menu_import.py
"""
Bulk menu import from an Excel workbook or a Google Sheet.

Both sources use the first sheet with a header row:
  id, name, description, price, image, category, popular,
  vegan, vegetarian, glutenFree, dairyFree,
  calories, protein, carbs, fat, fiber, ingredients

Flags are "yes"/"no"; ingredients are comma-separated. The imported rows
replace the whole menu.
"""

import logging
import zipfile
from io import BytesIO
from pathlib import Path
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import ValidationError as SchemaValidationError

from ..errors import ExternalServiceError, ValidationError, format_validation_errors
from ..schemas.menu import MenuItem
from .menu import MenuRepository

logger = logging.getLogger(__name__)

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]


# ── Row mapping ──────────────────────────────────────────────────────────


def rows_from_table(table: list[list[Any]] | list[tuple[Any, ...]]) -> list[dict[str, Any]]:
    """Turn [header, *rows] into dicts, skipping blank rows."""
    if not table:
        return []
    header = [str(h).strip() if h is not None else "" for h in table[0]]
    rows = []
    for values in table[1:]:
        if all(v is None or str(v).strip() == "" for v in values):
            continue
        rows.append({h: v for h, v in zip(header, values) if h})
    return rows


def _flag(row: dict[str, Any], key: str) -> bool:
    return str(row.get(key) or "").strip().lower() == "yes"


def _number(row: dict[str, Any], key: str, row_num: int) -> float:
    value = row.get(key)
    if value is None or str(value).strip() == "":
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Row {row_num}: {key} must be a number, got {value!r}") from None


def row_to_menu_item(row: dict[str, Any], row_num: int, fallback_id: int) -> MenuItem:
    raw_id = row.get("id")
    item_id = int(_number(row, "id", row_num)) if raw_id not in (None, "") else fallback_id
    ingredients = [
        part.strip() for part in str(row.get("ingredients") or "").split(",") if part.strip()
    ]

    try:
        return MenuItem.model_validate({
            "id": item_id,
            "name": str(row.get("name") or "").strip(),
            "description": str(row.get("description") or ""),
            "price": _number(row, "price", row_num),
            "image": str(row.get("image") or ""),
            "category": str(row.get("category") or "").strip(),
            "popular": _flag(row, "popular"),
            "dietaryInfo": {
                "vegan": _flag(row, "vegan"),
                "vegetarian": _flag(row, "vegetarian"),
                "glutenFree": _flag(row, "glutenFree"),
                "dairyFree": _flag(row, "dairyFree"),
            },
            "nutritionalInfo": {
                key: int(_number(row, key, row_num))
                for key in ("calories", "protein", "carbs", "fat", "fiber")
            },
            "ingredients": ingredients,
        })
    except SchemaValidationError as e:
        raise ValidationError(f"Row {row_num}: {format_validation_errors(e.errors())}") from e


def rows_to_menu_items(rows: list[dict[str, Any]]) -> list[MenuItem]:
    # Row numbers count the header as row 1, like a spreadsheet
    items = [row_to_menu_item(row, n + 2, n + 1) for n, row in enumerate(rows)]
    ids = [i.id for i in items]
    if len(set(ids)) != len(ids):
        raise ValidationError("Imported menu contains duplicate ids")
    return items


# ── Sources ──────────────────────────────────────────────────────────────


def read_excel_rows(content: bytes) -> list[dict[str, Any]]:
    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise ValidationError(f"Failed to process Excel file: {e}") from e

    try:
        sheet = workbook.worksheets[0]
        return rows_from_table(list(sheet.iter_rows(values_only=True)))
    finally:
        workbook.close()


def get_sheets_service(credentials_file: Path):
    creds = service_account.Credentials.from_service_account_file(
        str(credentials_file), scopes=SHEETS_SCOPES
    )
    return build("sheets", "v4", credentials=creds, cache_discovery=False)


def read_google_sheet_rows(service, sheet_id: str) -> list[dict[str, Any]]:
    try:
        meta = service.spreadsheets().get(spreadsheetId=sheet_id).execute()
        title = meta["sheets"][0]["properties"]["title"]
        result = service.spreadsheets().values().get(
            spreadsheetId=sheet_id, range=title
        ).execute()
    except HttpError as e:
        logger.error("Google Sheets request failed: %s", e)
        raise ExternalServiceError("Failed to fetch menu from Google Sheet") from e
    except (KeyError, IndexError) as e:
        raise ExternalServiceError("Google Sheet has no worksheets") from e

    return rows_from_table(result.get("values", []))


class MenuImporter:

    def __init__(
        self,
        menu: MenuRepository,
        sheet_id: str | None = None,
        credentials_file: Path | None = None,
        sheets_service=None,
    ):
        self.menu = menu
        self.sheet_id = sheet_id
        self.credentials_file = credentials_file
        self._sheets_service = sheets_service

    def import_excel(self, content: bytes) -> int:
        items = rows_to_menu_items(read_excel_rows(content))
        count = self.menu.replace_all(items)
        logger.info("Imported %d menu items from Excel", count)
        return count

    def sync_google_sheet(self) -> int:
        if not self.sheet_id:
            raise ValidationError("Google Sheet sync is not configured")

        service = self._sheets_service
        if service is None:
            if not self.credentials_file:
                raise ValidationError("Google Sheet sync is not configured")
            service = get_sheets_service(self.credentials_file)

        items = rows_to_menu_items(read_google_sheet_rows(service, self.sheet_id))
        count = self.menu.replace_all(items)
        logger.info("Synced %d menu items from Google Sheet %s", count, self.sheet_id)
        return count
