from dataclasses import asdict
from typing import Any, Dict, List, Optional

import pandas as pd
from loguru import logger

from clubsync.models import ExistingClub
from clubsync.stores.club_store import FIELD_MAP, InMemoryClubStore

_ATTR_TO_COLUMN = {attr: column for column, attr in FIELD_MAP.items()}


def load_club_documents(file_path: str) -> List[Dict[str, Any]]:
    """Load club rows from CSV as store documents, every column kept."""
    df = pd.read_csv(file_path, dtype=str)
    docs = []
    for _, row in df.iterrows():
        # NaN cells become None
        doc: Dict[str, Any] = {}
        for col in row.index:
            val = row[col]
            doc[col] = None if pd.isna(val) else val
        docs.append(doc)
    return docs


def load_zones_from_csv(file_path: str) -> List[Dict[str, str]]:
    """Load zones (id, name columns) from CSV."""
    df = pd.read_csv(file_path, dtype=str)
    zones = []
    for _, row in df.iterrows():
        if pd.isna(row["id"]) or pd.isna(row["name"]):
            continue
        zones.append({"id": row["id"], "name": row["name"]})
    return zones


class CsvClubStore(InMemoryClubStore):
    """
    Club store backed by a CSV export. Every update and insert is written
    straight back to the file; columns without a model attribute survive.
    """

    def __init__(self, clubs_path: str, zones_path: Optional[str] = None):
        self.clubs_path = clubs_path
        zones = load_zones_from_csv(zones_path) if zones_path else []
        super().__init__(zones=zones)
        docs = load_club_documents(clubs_path)
        for doc in docs:
            self._put_document(doc)
        logger.info(f"📂 Loaded {len(docs)} clubs and {len(zones)} zones from CSV")

    async def update_club(self, club_id: str, data: Dict[str, Any]) -> ExistingClub:
        updated = await super().update_club(club_id, data)
        self.save()
        return updated

    async def add_club(self, data: Dict[str, Any]) -> ExistingClub:
        club = await super().add_club(data)
        self.save()
        return club

    def save(self, file_path: Optional[str] = None) -> str:
        """Write all clubs to CSV using store document column names."""
        output_path = file_path or self.clubs_path
        columns = list(FIELD_MAP)
        rows = []
        for club in self._clubs.values():
            row = {_ATTR_TO_COLUMN[attr]: value for attr, value in asdict(club).items()}
            for key, value in self._extra.get(club.id, {}).items():
                if key not in columns:
                    columns.append(key)
                row[key] = value
            rows.append(row)
        pd.DataFrame(rows, columns=columns).to_csv(output_path, index=False)
        logger.debug(f"💾 Saved {len(rows)} clubs to {output_path}")
        return output_path
