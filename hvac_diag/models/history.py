# hvac_diag/models/history.py

from typing import Any, Dict, Optional

from pydantic import Field, field_validator # type: ignore

from hvac_diag.models.diagnosis import CamelModel, DiagnosisResult


class HistoryEntryCreate(CamelModel):
    id: Optional[str] = None
    timestamp: Optional[str] = None
    system_type: Optional[str] = None
    system_info: Dict[str, Any] = Field(default_factory=dict)
    symptoms: str = ""
    result: DiagnosisResult

    @field_validator("system_info", mode="before")
    @classmethod
    def _info(cls, v):
        return v if isinstance(v, dict) else {}
