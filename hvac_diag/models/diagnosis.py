# hvac_diag/models/diagnosis.py

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator # type: ignore
from pydantic.alias_generators import to_camel # type: ignore


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    UNKNOWN = "Unknown"


class RepairComplexity(str, Enum):
    EASY = "Easy"
    MODERATE = "Moderate"
    COMPLEX = "Complex"
    UNKNOWN = "Unknown"


class Source(str, Enum):
    LIVE = "live"
    CACHED = "cached"
    PREDEFINED = "predefined"
    GENERIC = "generic"


class DiyFeasibility(str, Enum):
    NONE = "None"
    PARTIAL = "Partial"


def _match_enum(enum_cls, value: Any, default):
    """
    Case-insensitive lookup; anything unrecognised maps to the default.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_cls:
            if member.value.lower() == wanted:
                return member
    return default


def _as_list(value: Any) -> list:
    if isinstance(value, list):
        return value
    return []


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --------------------------------------------------
# Diagnosis
# --------------------------------------------------

class Issue(CamelModel):
    issue: str = ""
    severity: Severity = Severity.UNKNOWN
    description: str = ""
    likelihood: Optional[int] = None

    @field_validator("issue", "description", mode="before")
    @classmethod
    def _text(cls, v):
        return _as_text(v) or ""

    @field_validator("severity", mode="before")
    @classmethod
    def _severity(cls, v):
        return _match_enum(Severity, v, Severity.UNKNOWN)

    @field_validator("likelihood", mode="before")
    @classmethod
    def _likelihood(cls, v):
        # 0-100; percentages like "70%" are accepted, garbage is dropped
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, str):
            v = v.strip().rstrip("%")
        try:
            number = int(round(float(v)))
        except (TypeError, ValueError, OverflowError):
            return None
        return max(0, min(100, number))


class CostRange(CamelModel):
    min: int
    max: int


class LaborCost(CostRange):
    hours: CostRange


class LineItem(CamelModel):
    issue: str
    cost_range: CostRange
    description: str
    diy_feasibility: DiyFeasibility


class CostEstimate(CamelModel):
    total_estimate: CostRange
    parts_cost: CostRange
    labor_cost: LaborCost
    line_items: List[LineItem] = Field(default_factory=list)
    regional_adjustments: Dict[str, float]
    warranty_considerations: str
    disclaimer: str


class DiagnosisResult(CamelModel):
    primary_issue: Optional[str] = None
    possible_issues: List[Issue] = Field(default_factory=list)
    troubleshooting: List[str] = Field(default_factory=list)
    required_items: List[str] = Field(default_factory=list)
    repair_complexity: RepairComplexity = RepairComplexity.UNKNOWN
    additional_notes: Optional[str] = None
    safety_warnings: Optional[str] = None
    source: Optional[Source] = None
    note: Optional[str] = None
    cost_estimates: Optional[CostEstimate] = None

    @field_validator("primary_issue", "additional_notes", "safety_warnings", "note", mode="before")
    @classmethod
    def _optional_text(cls, v):
        return _as_text(v)

    @field_validator("possible_issues", mode="before")
    @classmethod
    def _issues(cls, v):
        issues = []
        for item in _as_list(v):
            if isinstance(item, str):
                item = {"issue": item}
            if isinstance(item, (dict, Issue)):
                issues.append(item)
        return issues

    @field_validator("troubleshooting", "required_items", mode="before")
    @classmethod
    def _strings(cls, v):
        return [str(item) for item in _as_list(v) if item is not None]

    @field_validator("repair_complexity", mode="before")
    @classmethod
    def _complexity(cls, v):
        return _match_enum(RepairComplexity, v, RepairComplexity.UNKNOWN)

    @field_validator("source", mode="before")
    @classmethod
    def _source(cls, v):
        if v is None:
            return None
        return _match_enum(Source, v, None)

    @field_validator("cost_estimates", mode="before")
    @classmethod
    def _costs(cls, v):
        # estimates are derived server-side; a malformed stored copy is dropped
        if v is None or isinstance(v, CostEstimate):
            return v
        try:
            return CostEstimate.model_validate(v)
        except ValueError:
            return None


# --------------------------------------------------
# Requests
# --------------------------------------------------

class DiagnoseRequest(CamelModel):
    system_type: Optional[str] = None
    system_info: Dict[str, Any] = Field(default_factory=dict)
    symptoms: Optional[str] = None

    @field_validator("system_info", mode="before")
    @classmethod
    def _info(cls, v):
        return v if isinstance(v, dict) else {}
