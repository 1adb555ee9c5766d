"""Club stores backing the reconciliation pipeline."""
from clubsync.stores.club_store import ClubStore, InMemoryClubStore
from clubsync.stores.csv_store import CsvClubStore

__all__ = ["ClubStore", "InMemoryClubStore", "CsvClubStore"]
