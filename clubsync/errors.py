"""Exceptions raised by the reconciliation pipeline."""


class ClubSyncError(Exception):
    """Base class for all clubsync errors."""


class ExtractionError(ClubSyncError):
    """The input does not contain a usable JSON array."""


class RecordExtractionError(ExtractionError):
    """A single array element could not be mapped to a club."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"record {index}: {reason}")


class MatchingError(ClubSyncError):
    """Scoring failed or the existing clubs could not be read."""


class ApplyUpdateError(ClubSyncError):
    """Writing one selected match back to the store failed."""

    def __init__(self, club_id: str, reason: str):
        self.club_id = club_id
        self.reason = reason
        super().__init__(f"update of club {club_id} failed: {reason}")


class ClubStoreError(ClubSyncError):
    """The club store rejected a read or write."""
