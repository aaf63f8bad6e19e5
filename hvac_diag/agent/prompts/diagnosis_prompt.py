from typing import Any, Dict, Optional

from langchain_core.messages import SystemMessage, HumanMessage  # type: ignore

SYSTEM_PROMPT = (
    "You are an expert HVAC technician assistant. Your job is to diagnose "
    "HVAC issues based on the symptoms provided and suggest possible "
    "solutions. Provide step-by-step troubleshooting instructions that are "
    "clear and concise."
)

diagnosis_prompt = """
Diagnose the following HVAC issue:

System Type: {system_type}
System Information:
{system_info}

Symptoms: {symptoms}

Based on the information provided, please:
1. Identify the most likely issues
2. Rate the severity of each issue (Low, Medium, High)
3. Provide step-by-step troubleshooting instructions
4. List any required parts or tools
5. Estimate the repair complexity (Easy, Moderate, Complex)

Output rules:
- STRICT JSON ONLY
- No markdown
- No extra text

JSON format:
{{
  "primaryIssue": "one-line summary",
  "possibleIssues": [
    {{
      "issue": "Issue name",
      "severity": "Low | Medium | High",
      "description": "Brief description",
      "likelihood": number (0-100)
    }}
  ],
  "troubleshooting": ["Step 1: ...", "Step 2: ..."],
  "requiredItems": ["Item 1", "Item 2"],
  "repairComplexity": "Easy | Moderate | Complex",
  "additionalNotes": "Any additional information",
  "safetyWarnings": "Hazards the homeowner must avoid"
}}
"""


def format_system_info(system_info: Optional[Dict[str, Any]]) -> str:
    if not system_info:
        return "- none provided"
    return "\n".join(f"- {key}: {value}" for key, value in system_info.items())


def build_diagnosis_prompt(
    system_type: Optional[str],
    system_info: Optional[Dict[str, Any]],
    symptoms: str,
):
    return [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(
            content=diagnosis_prompt.format(
                system_type=system_type or "unknown",
                system_info=format_system_info(system_info),
                symptoms=symptoms,
            )
        ),
    ]
