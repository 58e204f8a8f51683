"""Result and input types shared by the analyzers."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple


class RiskLevel(str, Enum):
    SAFE = "SAFE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class ScoreResult:
    """Partial score and the issues that produced it, in detection order."""

    score: int = 0
    issues: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        return {"score": self.score, "issues": list(self.issues)}


@dataclass(frozen=True)
class FamiliaritySnapshot:
    familiar: bool = False
    first_visit: bool = True
    visit_count: int = 0
    days_since_last_visit: Optional[int] = 0
    familiarity_score: int = 0
    error: bool = False

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class RiskAssessment:
    score: int
    issues: Tuple[str, ...]
    risk_level: RiskLevel
    familiarity: FamiliaritySnapshot

    def to_dict(self) -> Dict:
        return {
            "score": self.score,
            "issues": list(self.issues),
            "risk_level": self.risk_level.value,
            "familiarity": self.familiarity.to_dict(),
        }


@dataclass(frozen=True)
class HistoryVisit:
    """One browsing-history entry; ``last_visit_time`` is timezone-aware."""

    url: str
    last_visit_time: datetime


@dataclass(frozen=True)
class InputField:
    type: str = "text"
    name: str = ""
    id: str = ""


@dataclass(frozen=True)
class FormFeatures:
    action: str = ""
    inputs: Tuple[InputField, ...] = ()


@dataclass(frozen=True)
class ImageFeatures:
    alt: str = ""
    src: str = ""


@dataclass(frozen=True)
class PageFeatures:
    """DOM-derived features of a loaded page.

    ``url`` is the page's own address; only its scheme and host are used.
    """

    url: str
    forms: Tuple[FormFeatures, ...] = ()
    visible_text: str = ""
    images: Tuple[ImageFeatures, ...] = ()


@dataclass(frozen=True)
class FormAnalysis:
    has_password_field: bool = False
    has_sensitive_fields: bool = False
    submit_url: Optional[str] = None
    is_secure: bool = False
    issues: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["issues"] = list(self.issues)
        return data


@dataclass(frozen=True)
class ContentAnalysis:
    urgency_language: bool = False
    brand_impersonation: bool = False
    brands_found: Tuple[str, ...] = ()
    issues: Tuple[str, ...] = ()

    def to_dict(self) -> Dict:
        return {
            "urgency_language": self.urgency_language,
            "brand_impersonation": self.brand_impersonation,
            "brands_found": list(self.brands_found),
            "issues": list(self.issues),
        }


@dataclass(frozen=True)
class PageReport:
    """Page-level findings, reported alongside (not merged into) the URL assessment."""

    url: str
    form: Optional[FormAnalysis] = None
    content: Optional[ContentAnalysis] = None
    status_code: Optional[int] = None
    final_url: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "url": self.url,
            "final_url": self.final_url,
            "status_code": self.status_code,
            "form": self.form.to_dict() if self.form else None,
            "content": self.content.to_dict() if self.content else None,
            "error": self.error,
        }
