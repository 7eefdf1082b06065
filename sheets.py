"""
sheets.py

Thin Google Sheets v4 client for the camera-matrix terminal.

Only two read calls are used: the values of one tab range, and the
spreadsheet metadata (title for the window caption).  Rows come back as
lists of strings; `parse_sheet_data()` turns them into dicts keyed by the
lower-cased header row.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

import requests
from loguru import logger

import config


class SheetError(RuntimeError):
    """Sheet could not be read (credentials, HTTP status or network)."""


@dataclass(frozen=True)
class SheetMetadata:
    title: str = config.DEFAULT_TITLE
    locale: str = config.DEFAULT_LOCALE
    time_zone: str = config.DEFAULT_TIME_ZONE


# ── helpers ────────────────────────────────────────────────────────────────
def _check_credentials(sheet_id: str, api_key: str) -> None:
    if not sheet_id or not api_key:
        raise SheetError("Sheet ID and API Key must be configured")


def _api_error(resp: requests.Response) -> SheetError:
    try:
        message = resp.json().get("error", {}).get("message") or resp.reason
    except ValueError:
        message = resp.reason
    return SheetError(f"API Error: {resp.status_code} - {message}")


def _get(url: str, api_key: str, session: Optional[requests.Session]) -> dict:
    http = session or requests
    try:
        resp = http.get(url, params={"key": api_key}, timeout=config.HTTP_TIMEOUT)
    except requests.RequestException as exc:
        raise SheetError(f"Network error: {exc}") from exc
    if not resp.ok:
        raise _api_error(resp)
    return resp.json()


# ── public API ─────────────────────────────────────────────────────────────
def fetch_sheet_data(
    sheet_id: str,
    range_: str,
    api_key: str,
    session: Optional[requests.Session] = None,
) -> List[List[str]]:
    """Return the raw `values` grid for *range_* (e.g. ``Cams!A1:Z1000``)."""
    _check_credentials(sheet_id, api_key)
    url = f"{config.SHEETS_API_BASE}/{sheet_id}/values/{range_}"
    try:
        data = _get(url, api_key, session)
    except SheetError as exc:
        logger.error(f"Error fetching sheet data: {exc}")
        raise
    return data.get("values") or []


def fetch_sheet_metadata(
    sheet_id: str,
    api_key: str,
    session: Optional[requests.Session] = None,
) -> SheetMetadata:
    """Spreadsheet title/locale/time zone; defaults when anything fails."""
    try:
        _check_credentials(sheet_id, api_key)
        data = _get(f"{config.SHEETS_API_BASE}/{sheet_id}", api_key, session)
    except SheetError as exc:
        logger.error(f"Error fetching sheet metadata: {exc}")
        return SheetMetadata()

    props = data.get("properties") or {}
    return SheetMetadata(
        title=props.get("title") or config.DEFAULT_TITLE,
        locale=props.get("locale") or config.DEFAULT_LOCALE,
        time_zone=props.get("timeZone") or config.DEFAULT_TIME_ZONE,
    )


def parse_sheet_data(rows: List[List[str]]) -> List[Dict[str, str]]:
    """First row is the header; short rows are padded with empty strings."""
    if not rows:
        return []

    headers = [str(h).strip().lower() for h in rows[0]]
    records = []
    for row in rows[1:]:
        records.append({
            header: (row[i] if i < len(row) and row[i] is not None else "")
            for i, header in enumerate(headers)
        })
    return records
