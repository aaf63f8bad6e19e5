import json
from pathlib import Path

COMMON_ISSUES = json.loads(
    Path(__file__).with_name("common_issues.json").read_text(encoding="utf-8")
)

SYSTEM_TYPE_NAMES = {
    "central-ac": "Central Air Conditioning",
    "heat-pump": "Heat Pump",
    "furnace": "Furnace",
    "boiler": "Boiler",
    "mini-split": "Mini-Split / Ductless System",
    "package-unit": "Package Unit",
}


def get_system_type_name(code: str) -> str:
    return SYSTEM_TYPE_NAMES.get(code, "Unknown System Type")
