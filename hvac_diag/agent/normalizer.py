"""
Response normalisation layer.

Purpose:
- Turn raw completion text into a DiagnosisResult
- Recover from markdown fences, chatter around the JSON, or plain prose
- Never raise: the worst case is the marker-based text shape
"""

import json
import logging
import re
from typing import Callable, List, Optional, Tuple

from pydantic import ValidationError # type: ignore

from hvac_diag.models.diagnosis import DiagnosisResult

log = logging.getLogger(__name__)

ISSUES_MARKER = "Possible Issues:"
STEPS_MARKER = "Troubleshooting Steps:"

UNPARSED_PRIMARY_ISSUE = "Could not determine primary issue"
UNPARSED_NOTES = "The AI response could not be properly formatted. Please try again."

_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


# --------------------------------------------------
# Extractors: text -> candidate dict, or None to pass
# --------------------------------------------------

def _load_object(text: str) -> Optional[dict]:
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def _strip_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json"):]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.replace("`", "").strip()


def parse_strict(text: str) -> Optional[dict]:
    return _load_object(text)


def parse_fenced(text: str) -> Optional[dict]:
    return _load_object(_strip_fences(text))


def parse_embedded(text: str) -> Optional[dict]:
    match = _OBJECT_RE.search(_strip_fences(text))
    if not match:
        return None
    return _load_object(match.group(0))


def _section(text: str, marker: str) -> List[str]:
    """
    Lines between the marker and the next blank line.
    """
    if marker not in text:
        return []
    body = text.split(marker, 1)[1].split("\n\n", 1)[0]
    return [line.strip() for line in body.split("\n") if line.strip()]


def parse_text_sections(text: str) -> dict:
    return {
        "primaryIssue": UNPARSED_PRIMARY_ISSUE,
        "possibleIssues": [
            {"issue": line, "severity": "Unknown", "description": "", "likelihood": 50}
            for line in _section(text, ISSUES_MARKER)
        ],
        "troubleshooting": _section(text, STEPS_MARKER),
        "requiredItems": [],
        "repairComplexity": "Unknown",
        "additionalNotes": UNPARSED_NOTES,
    }


FALLBACK_CHAIN: Tuple[Tuple[str, Callable[[str], Optional[dict]]], ...] = (
    ("json", parse_strict),
    ("fenced-json", parse_fenced),
    ("embedded-json", parse_embedded),
    ("text-sections", parse_text_sections),
)


# --------------------------------------------------
# Entry point
# --------------------------------------------------

def normalize_response(content: Optional[str]) -> DiagnosisResult:
    text = content if isinstance(content, str) else ""

    for stage, extract in FALLBACK_CHAIN:
        try:
            candidate = extract(text)
        except Exception:
            log.exception("Extractor %s failed", stage)
            continue

        if candidate is None:
            continue

        try:
            result = DiagnosisResult.model_validate(candidate)
        except ValidationError as exc:
            log.warning("Stage %s produced an invalid diagnosis: %s", stage, exc)
            continue
        except Exception:
            log.exception("Stage %s could not be coerced into a diagnosis", stage)
            continue

        log.debug("Diagnosis normalised via %s", stage)
        if stage == "text-sections":
            log.warning("Completion was not JSON, used text-section extraction")
        return result

    # unreachable unless the text-section extractor itself breaks
    return DiagnosisResult(
        primary_issue=UNPARSED_PRIMARY_ISSUE,
        additional_notes=UNPARSED_NOTES,
    )
