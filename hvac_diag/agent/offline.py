"""
Offline diagnosis.

Precedence, first match wins:
1. a saved diagnostic for the same system type whose symptoms contain ours
2. the predefined common-issues table, keyed by a phrase classifier
3. generic advice
"""

import copy
import logging
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError # type: ignore

from hvac_diag.data import COMMON_ISSUES
from hvac_diag.models.diagnosis import DiagnosisResult, Source

log = logging.getLogger(__name__)

CACHED_NOTE = "This diagnosis is based on similar previous issues you've encountered."
PREDEFINED_NOTE = (
    "This diagnosis is based on common issues data. "
    "For a more accurate diagnosis, please connect to the internet."
)
GENERIC_NOTE = "This is generic advice based on limited offline data."

# Order matters: "no heat" sits in both heating groups and the first one tested wins.
ISSUE_PHRASES = (
    ("not-cooling", ("not cooling", "no cool", "isn't cooling")),
    ("making-noise", ("noise", "loud", "sound")),
    ("not-heating", ("not heating", "no heat", "isn't heating")),
    ("no-heat", ("no heat", "won't heat")),
    ("short-cycling", ("cycling", "turning on and off")),
)

GENERIC_DIAGNOSIS = {
    "possibleIssues": [
        {
            "issue": "Unknown issue",
            "severity": "Unknown",
            "description": "Cannot determine specific issue while offline",
        }
    ],
    "troubleshooting": [
        "Check power supply to the system",
        "Verify thermostat settings",
        "Check and replace air filters if dirty",
        "Ensure all vents/registers are open",
        "Connect to internet for more accurate diagnosis",
    ],
    "requiredItems": [
        "Replacement air filter",
        "Flashlight for visual inspection",
    ],
    "repairComplexity": "Unknown",
    "additionalNotes": (
        "Limited diagnostic capability in offline mode. "
        "Please connect to the internet for a complete diagnosis."
    ),
}


def classify_symptoms(symptoms: str) -> Optional[str]:
    text = (symptoms or "").lower()
    for issue_key, phrases in ISSUE_PHRASES:
        if any(phrase in text for phrase in phrases):
            return issue_key
    return None


def _tag(data: Dict[str, Any], source: Source, note: str) -> DiagnosisResult:
    result = DiagnosisResult.model_validate(copy.deepcopy(data))
    return result.model_copy(update={"source": source, "note": note})


def _from_history(
    system_type: str,
    symptoms: str,
    history: Iterable[Dict[str, Any]],
) -> Optional[DiagnosisResult]:
    wanted = (symptoms or "").lower()

    for entry in history:
        if not isinstance(entry, dict) or entry.get("systemType") != system_type:
            continue
        if wanted not in str(entry.get("symptoms") or "").lower():
            continue

        stored = entry.get("result")
        if not isinstance(stored, dict):
            continue

        try:
            return _tag(stored, Source.CACHED, CACHED_NOTE)
        except ValidationError:
            log.warning("Skipping unreadable saved diagnostic %s", entry.get("id"))

    return None


def _from_table(system_type: str, symptoms: str) -> Optional[DiagnosisResult]:
    issue_key = classify_symptoms(symptoms)
    entry = COMMON_ISSUES.get(system_type, {}).get(issue_key) if issue_key else None
    if entry is None:
        return None
    return _tag(entry, Source.PREDEFINED, PREDEFINED_NOTE)


def resolve_offline(
    system_type: Optional[str],
    system_info: Optional[Dict[str, Any]],
    symptoms: Optional[str],
    history: Iterable[Dict[str, Any]] = (),
) -> DiagnosisResult:
    # system_info is accepted for parity with the live request and not used for matching
    system_type = system_type or ""
    symptoms = symptoms or ""

    try:
        result = _from_history(system_type, symptoms, history or ())
        if result is not None:
            log.info("Offline diagnosis served from saved history")
            return result

        result = _from_table(system_type, symptoms)
        if result is not None:
            log.info("Offline diagnosis served from common issues table")
            return result
    except Exception:
        log.exception("Offline lookup failed, using generic advice")

    log.info("Offline diagnosis fell back to generic advice")
    return _tag(GENERIC_DIAGNOSIS, Source.GENERIC, GENERIC_NOTE)
