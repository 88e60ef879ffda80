"""
Airtable-backed candidate store.

Talks to the Airtable REST API (v0) directly through requests. The table is
expected to have the columns produced by CandidateRecord.to_store_fields().
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from config.settings import Settings, get_settings
from errors import ConfigurationError, StoreError

logger = logging.getLogger(__name__)

IDENTITY_FIELD = "LinkedIn URL"
NAME_FIELD = "Name"


def _formula_literal(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class AirtableCandidateStore:
    """Candidate store over one Airtable table."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None) -> None:
        self.settings = settings or get_settings()
        if not self.settings.airtable_token or not self.settings.airtable_base_id:
            raise ConfigurationError("AIRTABLE_TOKEN and AIRTABLE_BASE_ID must be set in .env file")
        self.session = session or requests.Session()
        self.table_url = (
            f"{self.settings.airtable_api_url.rstrip('/')}/"
            f"{self.settings.airtable_base_id}/{quote(self.settings.airtable_table_name, safe='')}"
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.airtable_token}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, params: Optional[Any] = None, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Send one API request, retrying rate limits and transport errors with backoff."""
        last_error: Optional[str] = None
        for attempt in range(self.settings.max_retries):
            try:
                response = self.session.request(
                    method,
                    self.table_url,
                    headers=self._headers(),
                    params=params,
                    json=payload,
                    timeout=self.settings.request_timeout_seconds,
                )
            except requests.exceptions.RequestException as e:
                last_error = str(e)
                logger.warning(f"Airtable {method} attempt {attempt + 1} failed: {e}")
            else:
                if response.status_code == 429:
                    last_error = "rate limited"
                    logger.warning(f"Airtable rate limit hit on attempt {attempt + 1}")
                elif 200 <= response.status_code < 300:
                    try:
                        return response.json()
                    except ValueError as e:
                        raise StoreError(f"Airtable returned invalid JSON: {e}") from e
                else:
                    raise StoreError(f"Airtable {method} failed with status {response.status_code}: {response.text[:300]}")
            if attempt < self.settings.max_retries - 1:
                time.sleep(2 ** attempt)
        raise StoreError(f"Airtable {method} failed after {self.settings.max_retries} attempts: {last_error}")

    def find_existing(self, linkedin_url: str) -> bool:
        data = self._request("GET", params={
            "filterByFormula": f"{{{IDENTITY_FIELD}}} = {_formula_literal(linkedin_url)}",
            "maxRecords": 1,
        })
        return len(data.get("records") or []) > 0

    def find_first_blank_row(self) -> Optional[str]:
        """First record whose Name is empty, scanning in Name ascending order."""
        offset: Optional[str] = None
        while True:
            params: List[tuple] = [
                ("fields[]", NAME_FIELD),
                ("sort[0][field]", NAME_FIELD),
                ("sort[0][direction]", "asc"),
            ]
            if offset:
                params.append(("offset", offset))
            data = self._request("GET", params=params)
            for record in data.get("records") or []:
                name = (record.get("fields") or {}).get(NAME_FIELD)
                if not name or not str(name).strip():
                    return record.get("id")
            offset = data.get("offset")
            if not offset:
                return None

    def write_row(self, row_id: Optional[str], fields: Dict[str, Any]) -> str:
        if row_id:
            data = self._request("PATCH", payload={"records": [{"id": row_id, "fields": fields}]})
        else:
            data = self._request("POST", payload={"records": [{"fields": fields}]})
        records = data.get("records") or []
        if not records or not records[0].get("id"):
            raise StoreError("Airtable write returned no record id")
        return records[0]["id"]
