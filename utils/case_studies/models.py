from datetime import date, datetime
from typing import Any, Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Helper functions ---


def parse_enacted_date(value: Optional[str]) -> Optional[date]:
    """
    Parses a plain date or a full ISO 8601 timestamp (e.g.
    "2024-03-13T00:00:00Z"). Returns None when missing or unparseable.
    """
    if not value or not value.strip():
        return None
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


# --- Summary records ---


class CaseStudySummary(BaseModel):
    """
    Lightweight list-view record for a case study, as returned by the
    backing service's list endpoint. Immutable once fetched.
    """
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str
    country: str
    policy_name: str
    # Open set: the service may add policy types the UI has no badge for
    policy_type: Optional[str] = None
    data_quality: Optional[str] = None
    enacted_date: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_are_empty(cls, value: Any) -> Any:
        return _none_to_list(value)

    @property
    def enacted_on(self) -> Optional[date]:
        return parse_enacted_date(self.enacted_date)


# --- Detail records ---


class PolicyDescription(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    name: Optional[str] = None
    description: Optional[str] = None
    enacted_date: Optional[str] = None
    key_provisions: List[str] = Field(default_factory=list)


class SocialImpact(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    trust_change_pct: Optional[float] = None
    bias_reduction_pct: Optional[float] = None


class EconomicImpact(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    compliance_costs_usd: Optional[float] = None
    startup_growth_pct: Optional[float] = None


class ImplementationReality(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    timeline_months: Optional[float] = None
    compliance_rate_pct: Optional[float] = None


class Outcomes(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    social_impact: SocialImpact = Field(default_factory=SocialImpact)
    economic_impact: EconomicImpact = Field(default_factory=EconomicImpact)
    implementation_reality: ImplementationReality = Field(
        default_factory=ImplementationReality
    )
    qualitative_insights: List[str] = Field(default_factory=list)


class ComparabilityMetadata(BaseModel):
    """Comparability scores relative to the consuming jurisdiction."""
    model_config = ConfigDict(frozen=True, extra="allow")

    gdp_ratio_to_morocco: Optional[float] = None
    legal_similarity: Optional[float] = None
    tech_maturity_gap: Optional[float] = None


class CaseStudyDetail(BaseModel):
    """
    Fully hydrated case study, fetched on demand when a summary is selected.
    Carries the summary fields where the service includes them.
    """
    model_config = ConfigDict(frozen=True, extra="allow", coerce_numbers_to_str=True)

    id: str
    country: str
    policy_name: Optional[str] = None
    policy_type: Optional[str] = None
    data_quality: Optional[str] = None
    enacted_date: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    policy: PolicyDescription = Field(default_factory=PolicyDescription)
    outcomes: Outcomes = Field(default_factory=Outcomes)
    metadata: ComparabilityMetadata = Field(default_factory=ComparabilityMetadata)

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_are_empty(cls, value: Any) -> Any:
        return _none_to_list(value)
