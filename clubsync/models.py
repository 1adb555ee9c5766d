"""
Typed data models for the club reconciliation pipeline.
All data structures used throughout the codebase should be defined here.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class MatchTier(str, Enum):
    """Confidence tier of a match, ordered from most to least confident."""
    EXACT = "exact"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


class SuggestedAction(str, Enum):
    UPDATE = "update"
    REVIEW = "review"
    SKIP = "skip"


@dataclass
class ExtractedClub:
    """Club record parsed from an untrusted JSON payload."""
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    contact_person: Optional[str] = None
    contact_role: Optional[str] = None
    additional_info: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "name": self.name,
            "address": self.address,
            "phone": self.phone,
            "email": self.email,
            "website": self.website,
            "logoUrl": self.logo_url,
            "contactPerson": self.contact_person,
            "contactRole": self.contact_role,
            "additionalInfo": self.additional_info,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class ExistingClub:
    """Club already held by the club store."""
    id: str
    name: str
    zone_id: Optional[str] = None
    physical_address: Optional[str] = None
    postal_address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website_url: Optional[str] = None
    social_media_url: Optional[str] = None
    logo_url: Optional[str] = None


@dataclass
class RejectedRecord:
    """Array element that could not be mapped to a club."""
    index: int
    reason: str


@dataclass
class ExtractionResult:
    clubs: List[ExtractedClub] = field(default_factory=list)
    rejected: List[RejectedRecord] = field(default_factory=list)


@dataclass
class ClubMatch:
    """Best-scoring existing club for one extracted club."""
    club_id: str
    existing_club_name: str
    extracted_data: ExtractedClub
    match_confidence: float
    match_type: MatchTier
    suggested_action: SuggestedAction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "clubId": self.club_id,
            "existingClubName": self.existing_club_name,
            "extractedData": self.extracted_data.to_dict(),
            "matchConfidence": self.match_confidence,
            "matchType": self.match_type.value,
            "suggestedAction": self.suggested_action.value,
        }


@dataclass
class ImportSummary:
    """Aggregate counts over one run's match list."""
    total_extracted: int = 0
    high_confidence_matches: int = 0  # exact + high
    medium_confidence_matches: int = 0
    low_confidence_matches: int = 0
    no_matches: int = 0
    by_tier: Dict[str, int] = field(default_factory=lambda: {t.value: 0 for t in MatchTier})
    rejected: int = 0
    imported: Optional[int] = None  # apply mode only
    skipped: Optional[int] = None  # apply mode only

    @classmethod
    def from_matches(cls, total_extracted: int, matches: List[ClubMatch], rejected: int = 0) -> "ImportSummary":
        by_tier = {t.value: 0 for t in MatchTier}
        for m in matches:
            by_tier[m.match_type.value] += 1
        return cls(
            total_extracted=total_extracted,
            high_confidence_matches=by_tier["exact"] + by_tier["high"],
            medium_confidence_matches=by_tier["medium"],
            low_confidence_matches=by_tier["low"],
            no_matches=by_tier["none"],
            by_tier=by_tier,
            rejected=rejected,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "totalExtracted": self.total_extracted,
            "highConfidenceMatches": self.high_confidence_matches,
            "mediumConfidenceMatches": self.medium_confidence_matches,
            "lowConfidenceMatches": self.low_confidence_matches,
            "noMatches": self.no_matches,
            "byTier": dict(self.by_tier),
            "rejected": self.rejected,
        }
        if self.imported is not None:
            data["imported"] = self.imported
        if self.skipped is not None:
            data["skipped"] = self.skipped
        return data


@dataclass
class ImportResult:
    """Outcome of a preview or apply run."""
    success: bool
    mode: str  # "preview" or "import"
    matches: List[ClubMatch] = field(default_factory=list)
    summary: ImportSummary = field(default_factory=ImportSummary)
    error: Optional[str] = None
    applied_count: Optional[int] = None
    skipped_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "success": self.success,
            "mode": self.mode,
            "matches": [m.to_dict() for m in self.matches],
            "summary": self.summary.to_dict(),
        }
        if self.error is not None:
            data["error"] = self.error
        if self.applied_count is not None:
            data["appliedCount"] = self.applied_count
            data["skippedCount"] = self.skipped_count
        return data


@dataclass
class LogEntry:
    timestamp: datetime
    message: str

    def format(self) -> str:
        return f"[{self.timestamp.strftime('%H:%M:%S')}] {self.message}"
