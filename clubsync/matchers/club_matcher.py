from typing import List, Tuple
from loguru import logger

from clubsync.config import MATCH_THRESHOLDS
from clubsync.errors import MatchingError
from clubsync.models import ClubMatch, ExistingClub, ExtractedClub, MatchTier, SuggestedAction
from clubsync.matchers.similarity import calculate_similarity, strip_name_noise


def classify_score(score: float) -> Tuple[MatchTier, SuggestedAction]:
    """
    Map a similarity score to its confidence tier and suggested action.

    Args:
        score (float): Best similarity score in [0, 1].

    Returns:
        Tuple[MatchTier, SuggestedAction]: Tier and action for the score.
    """
    if score >= MATCH_THRESHOLDS["exact"]:
        return MatchTier.EXACT, SuggestedAction.UPDATE
    if score >= MATCH_THRESHOLDS["high"]:
        return MatchTier.HIGH, SuggestedAction.UPDATE
    if score >= MATCH_THRESHOLDS["medium"]:
        return MatchTier.MEDIUM, SuggestedAction.REVIEW
    if score >= MATCH_THRESHOLDS["low"]:
        return MatchTier.LOW, SuggestedAction.REVIEW
    return MatchTier.NONE, SuggestedAction.SKIP


def best_match(extracted: ExtractedClub, existing: List[ExistingClub]) -> Tuple[ExistingClub, float]:
    """
    Find the existing club whose name scores highest against an extracted club.

    Ties keep the first club encountered, so the result follows the order of
    `existing`.

    Args:
        extracted (ExtractedClub): Extracted club to place.
        existing (List[ExistingClub]): Non-empty list of existing clubs.

    Returns:
        Tuple[ExistingClub, float]: Best club and its score.
    """
    target = strip_name_noise(extracted.name)
    best = existing[0]
    best_score = calculate_similarity(target, strip_name_noise(best.name))

    for club in existing[1:]:
        score = calculate_similarity(target, strip_name_noise(club.name))
        if score > best_score:
            best = club
            best_score = score

    return best, best_score


def find_matches(extracted: List[ExtractedClub], existing: List[ExistingClub]) -> List[ClubMatch]:
    """
    Pair every extracted club with its best-scoring existing club.

    Several extracted clubs may pick the same existing club; no one-to-one
    assignment is made.

    Args:
        extracted (List[ExtractedClub]): Clubs parsed from the payload.
        existing (List[ExistingClub]): Clubs currently in the store.

    Returns:
        List[ClubMatch]: One match per extracted club, in input order. Empty
                         when there are no existing clubs.
    """
    if not existing:
        logger.debug("⚠️ No existing clubs to match against")
        return []

    matches: List[ClubMatch] = []
    for club in extracted:
        try:
            best, score = best_match(club, existing)
        except (TypeError, AttributeError) as e:
            raise MatchingError(f"Failed to score '{club.name}': {e}") from e

        tier, action = classify_score(score)
        logger.debug(f"🔗 '{club.name}' → '{best.name}' ({score:.2f}, {tier.value})")
        matches.append(
            ClubMatch(
                club_id=best.id,
                existing_club_name=best.name,
                extracted_data=club,
                match_confidence=score,
                match_type=tier,
                suggested_action=action,
            )
        )

    return matches
