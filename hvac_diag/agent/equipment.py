# Equipment details from a nameplate / unit photo

import base64
import json
import logging
import re
from typing import Any, Dict

from hvac_diag.config import GROQ_VISION_MODEL
from hvac_diag.agent.diagnosis_agent import complete
from hvac_diag.agent.prompts.equipment_prompt import build_equipment_prompt

log = logging.getLogger(__name__)

EQUIPMENT_FIELDS = ("brand", "model", "serialNumber", "age", "tonnage", "additionalInfo")
FALLBACK_INFO_NOTE = "Information extracted from image analysis"

_FENCED_RE = re.compile(r"```json\n([\s\S]*)\n```")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
_BRAND_RE = re.compile(r"brand[\"\s:]+([^\"}\s,]+)", re.IGNORECASE)
_MODEL_RE = re.compile(r"model[\"\s:]+([^\"}\s,]+)", re.IGNORECASE)


def parse_equipment_info(text: str) -> Dict[str, Any]:
    text = text or ""

    match = _FENCED_RE.search(text)
    if match:
        candidate = match.group(1)
    else:
        match = _OBJECT_RE.search(text)
        candidate = match.group(0) if match else text

    try:
        data = json.loads(candidate)
        if isinstance(data, dict):
            info = {field: "" for field in EQUIPMENT_FIELDS}
            info.update({k: "" if v is None else v for k, v in data.items()})
            return info
    except ValueError:
        log.warning("Image analysis was not JSON, falling back to regex extraction")

    brand = _BRAND_RE.search(text)
    model = _MODEL_RE.search(text)
    return {
        "brand": brand.group(1) if brand else "",
        "model": model.group(1) if model else "",
        "serialNumber": "",
        "age": "",
        "tonnage": "",
        "additionalInfo": FALLBACK_INFO_NOTE,
    }


def analyze_equipment_image(image: bytes, content_type: str = "image/jpeg") -> Dict[str, Any]:
    encoded = base64.b64encode(image).decode("ascii")
    raw = complete(build_equipment_prompt(encoded, content_type), model=GROQ_VISION_MODEL)
    return {
        "systemInfo": parse_equipment_info(raw),
        "rawAnalysis": raw,
    }
