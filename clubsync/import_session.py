# clubsync/import_session.py

from typing import Any, Dict, Iterable, Optional, Set
from loguru import logger

from clubsync.errors import ApplyUpdateError, ClubSyncError, MatchingError
from clubsync.extractor import parse_club_records
from clubsync.matchers.club_matcher import find_matches
from clubsync.models import ClubMatch, ExtractedClub, ImportResult, ImportSummary
from clubsync.session_logs import SessionLogStore
from clubsync.stores import ClubStore


def build_update(extracted: ExtractedClub) -> Dict[str, Any]:
    """
    Partial store update carrying only the non-empty extracted contact fields.
    """
    update: Dict[str, Any] = {}
    if extracted.address:
        update["physicalAddress"] = extracted.address
    if extracted.phone:
        update["phone"] = extracted.phone
    if extracted.email:
        update["email"] = extracted.email
    if extracted.website:
        update["websiteUrl"] = extracted.website
    if extracted.logo_url:
        update["logoUrl"] = extracted.logo_url
    return update


class ImportSession:
    """
    Runs one preview or apply pass of the club directory import.

    Progress lines go to loguru and, when a session id is given, to the
    session log store so a client can follow them as an event stream.
    """

    def __init__(
        self,
        store: ClubStore,
        log_store: Optional[SessionLogStore] = None,
        session_id: Optional[str] = None,
    ):
        self.store = store
        self.log_store = log_store
        self.session_id = session_id

    def _log(self, message: str) -> None:
        logger.info(message)
        if self.log_store is not None:
            self.log_store.append(self.session_id, message)

    async def _extract_and_match(self, json_content: str, mode: str):
        self._log(f"🕷️ Starting club data {mode} from JSON content")
        self._log(f"📄 JSON content length: {len(json_content)} characters")

        extraction = parse_club_records(json_content)
        self._log(f"📊 Extracted {len(extraction.clubs)} clubs from JSON")
        for rejected in extraction.rejected:
            self._log(f"⚠️ Skipped record {rejected.index}: {rejected.reason}")

        try:
            existing = await self.store.list_clubs()
        except Exception as e:
            raise MatchingError(f"Could not load existing clubs: {e}") from e

        matches = find_matches(extraction.clubs, existing)
        summary = ImportSummary.from_matches(len(extraction.clubs), matches, rejected=len(extraction.rejected))
        return matches, summary, {club.id for club in existing}

    def _failure(self, mode: str, error: Exception) -> ImportResult:
        self._log(f"❌ Club data {mode} failed: {error}")
        return ImportResult(success=False, mode=mode, error=str(error))

    async def run_preview(self, json_content: str) -> ImportResult:
        """
        Extract and match without touching the store.

        Args:
            json_content (str): Raw text containing the JSON array.

        Returns:
            ImportResult: Matches and summary, or success=False with an error.
        """
        try:
            matches, summary, _ = await self._extract_and_match(json_content, "preview")
        except ClubSyncError as e:
            return self._failure("preview", e)

        self._log(f"✅ Preview completed. Found {len(matches)} potential matches")
        return ImportResult(success=True, mode="preview", matches=matches, summary=summary)

    async def _apply_one(self, match: ClubMatch) -> None:
        try:
            await self.store.update_club(match.club_id, build_update(match.extracted_data))
        except Exception as e:
            raise ApplyUpdateError(match.club_id, str(e)) from e

    async def run_apply(self, json_content: str, selected_ids: Iterable[str]) -> ImportResult:
        """
        Re-run extraction and matching, then write the selected matches.

        Selected ids are checked against the current store; stale ids are
        logged and ignored. Each update is independent: a failure is logged
        and counted as skipped without stopping the rest.

        Args:
            json_content (str): Raw text containing the JSON array.
            selected_ids (Iterable[str]): Existing club ids to update.

        Returns:
            ImportResult: Matches, summary with imported/skipped counts, and
                          applied_count / skipped_count.
        """
        try:
            matches, summary, current_ids = await self._extract_and_match(json_content, "import")
        except ClubSyncError as e:
            return self._failure("import", e)

        selected: Set[str] = set(selected_ids)
        for stale in sorted(selected - current_ids):
            self._log(f"⚠️ Selected club {stale} no longer exists, ignoring")
        selected &= current_ids

        applied = 0
        skipped = 0
        for match in matches:
            if match.club_id not in selected:
                skipped += 1
                continue
            try:
                await self._apply_one(match)
                applied += 1
                self._log(f"✅ Updated club {match.existing_club_name} with new data")
            except ApplyUpdateError as e:
                skipped += 1
                self._log(f"❌ Failed to update club {match.existing_club_name}: {e.reason}")

        summary.imported = applied
        summary.skipped = skipped
        self._log(f"✅ Import completed. Updated {applied} clubs, skipped {skipped}")
        return ImportResult(
            success=True,
            mode="import",
            matches=matches,
            summary=summary,
            applied_count=applied,
            skipped_count=skipped,
        )
