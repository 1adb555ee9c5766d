import os
import asyncio
import csv
import sys
from typing import List
from loguru import logger

from clubsync.models import ClubMatch
from clubsync.import_session import ImportSession
from clubsync.stores import CsvClubStore
from clubsync.config import INPUT_JSON, CLUBS_CSV, ZONES_CSV, OUTPUT_CSV, LOG_LEVEL

OUTPUT_HEADER = [
    "Extracted name",
    "Club id",
    "Existing name",
    "Confidence",
    "Match type",
    "Suggested action",
    "Address",
    "Phone",
    "Email",
    "Website",
]


def write_matches_csv(matches: List[ClubMatch], output_path: str) -> None:
    """
    Write the preview match table to CSV, one row per extracted club.
    """
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(OUTPUT_HEADER)
        for match in matches:
            data = match.extracted_data
            writer.writerow([
                data.name,
                match.club_id,
                match.existing_club_name,
                f"{match.match_confidence:.3f}",
                match.match_type.value,
                match.suggested_action.value,
                data.address or "",
                data.phone or "",
                data.email or "",
                data.website or "",
            ])


async def main():
    """
    Preview the club directory dump against the clubs CSV.

    - Loads existing clubs (and zones, when present) from CSV.
    - Extracts and matches every club in the JSON dump.
    - Writes the match table to the output CSV.
    """
    # Initialize logs
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")

    store = CsvClubStore(CLUBS_CSV, ZONES_CSV if os.path.exists(ZONES_CSV) else None)
    with open(INPUT_JSON, encoding="utf-8") as f:
        json_content = f.read()

    result = await ImportSession(store).run_preview(json_content)
    if not result.success:
        logger.error(f"Preview failed: {result.error}")
        sys.exit(1)

    write_matches_csv(result.matches, OUTPUT_CSV)
    summary = result.summary
    print(
        f"Extracted {summary.total_extracted} clubs: "
        f"{summary.high_confidence_matches} high, {summary.medium_confidence_matches} medium, "
        f"{summary.low_confidence_matches} low, {summary.no_matches} unmatched → {OUTPUT_CSV}"
    )


if __name__ == "__main__":
    asyncio.run(main())
