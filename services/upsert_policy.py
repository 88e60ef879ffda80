from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from errors import StoreError
from models.candidate_record import CandidateRecord
from ports.store import CandidateStorePort

logger = logging.getLogger(__name__)


class UpsertOutcome(str, Enum):
    ADDED = "added"
    DUPLICATE = "duplicate"
    FAILED = "failed"


class UpsertPolicy:
    """Insert-if-new against the candidate store, reusing blank placeholder rows first."""

    def __init__(self, store: CandidateStorePort) -> None:
        self.store = store

    def _target_row(self) -> Optional[str]:
        try:
            return self.store.find_first_blank_row()
        except StoreError as e:
            # Appending is always safe, so a failed scan only loses row reuse
            logger.error(f"Error finding empty row: {e}")
            return None

    def upsert(self, candidate: CandidateRecord) -> UpsertOutcome:
        try:
            exists = self.store.find_existing(candidate.linkedin_url)
        except StoreError as e:
            logger.error(f"Error checking candidate existence for {candidate.linkedin_url}: {e}")
            return UpsertOutcome.FAILED

        if exists:
            logger.info(f"Skipping duplicate: {candidate.name}", extra={"status": "duplicate"})
            return UpsertOutcome.DUPLICATE

        row_id = self._target_row()
        try:
            self.store.write_row(row_id, candidate.to_store_fields())
        except StoreError as e:
            logger.error(f"Failed to add {candidate.name}: {e}", extra={"status": "failed"})
            return UpsertOutcome.FAILED

        if row_id:
            logger.info(f"Updated empty row with: {candidate.name}", extra={"status": "added"})
        else:
            logger.info(f"Created new row for: {candidate.name}", extra={"status": "added"})
        logger.info(f"   {candidate.describe()}")
        return UpsertOutcome.ADDED


def upsert_candidate(candidate: CandidateRecord, store: CandidateStorePort) -> bool:
    """True when the candidate was written, False when skipped as duplicate or failed."""
    return UpsertPolicy(store).upsert(candidate) is UpsertOutcome.ADDED
