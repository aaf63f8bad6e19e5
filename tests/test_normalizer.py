import json

from hvac_diag.agent.normalizer import (
    UNPARSED_NOTES,
    UNPARSED_PRIMARY_ISSUE,
    normalize_response,
)
from hvac_diag.models.diagnosis import RepairComplexity, Severity


FULL = {
    "primaryIssue": "Refrigerant leak",
    "possibleIssues": [
        {"issue": "Low refrigerant", "severity": "High", "description": "Leak in the line set", "likelihood": 70},
        {"issue": "Dirty filter", "severity": "Low", "description": "Restricted airflow", "likelihood": 30},
    ],
    "troubleshooting": ["Step 1: Replace filter", "Step 2: Check for ice on the coil"],
    "requiredItems": ["Air filter", "Leak detector"],
    "repairComplexity": "Complex",
    "additionalNotes": "Refrigerant work needs a license",
    "safetyWarnings": "Turn off power at the disconnect first",
}


def test_valid_json_round_trips():
    result = normalize_response(json.dumps(FULL))
    assert result.to_wire() == FULL


def test_missing_optional_fields_get_defaults():
    result = normalize_response('{"possibleIssues": [{"issue": "Bad capacitor", "severity": "medium"}]}')
    wire = result.to_wire()

    assert wire["possibleIssues"] == [
        {"issue": "Bad capacitor", "severity": "Medium", "description": ""}
    ]
    assert wire["troubleshooting"] == []
    assert wire["requiredItems"] == []
    assert wire["repairComplexity"] == "Unknown"
    assert "primaryIssue" not in wire
    assert "source" not in wire


def test_unknown_fields_are_ignored():
    result = normalize_response('{"repairComplexity": "Easy", "confidence": 0.9}')
    assert "confidence" not in result.to_wire()
    assert result.repair_complexity == RepairComplexity.EASY


def test_fenced_json_matches_unwrapped():
    fenced = "```json\n" + json.dumps(FULL) + "\n```"
    assert normalize_response(fenced) == normalize_response(json.dumps(FULL))


def test_json_embedded_in_chatter():
    text = "Sure! Here is the diagnosis:\n" + json.dumps(FULL) + "\nLet me know if you need more."
    assert normalize_response(text).to_wire() == FULL


def test_possible_issues_marker_text():
    text = "Here is what I found.\nPossible Issues:\nA\nB\n\nSomething else"
    result = normalize_response(text)

    assert [i.issue for i in result.possible_issues] == ["A", "B"]
    for issue in result.possible_issues:
        assert issue.severity == Severity.UNKNOWN
        assert issue.description == ""
        assert issue.likelihood == 50
    assert result.primary_issue == UNPARSED_PRIMARY_ISSUE


def test_troubleshooting_marker_text():
    text = "Troubleshooting Steps:\n  Check breaker \n\n   \nReset thermostat\n\nDone"
    result = normalize_response(text)
    assert result.troubleshooting == ["Check breaker"]


def test_unparseable_text_gives_default_shape():
    result = normalize_response("the unit is probably broken, call someone")
    wire = result.to_wire()

    assert wire["primaryIssue"] == UNPARSED_PRIMARY_ISSUE
    assert wire["possibleIssues"] == []
    assert wire["troubleshooting"] == []
    assert wire["requiredItems"] == []
    assert wire["repairComplexity"] == "Unknown"
    assert wire["additionalNotes"] == UNPARSED_NOTES


def test_broken_braces_fall_through_to_text():
    result = normalize_response("{ not json at all }\nPossible Issues:\nFan motor\n\n")
    assert [i.issue for i in result.possible_issues] == ["Fan motor"]


def test_non_object_json_is_not_accepted():
    result = normalize_response("[1, 2, 3]")
    assert result.primary_issue == UNPARSED_PRIMARY_ISSUE


def test_wrong_types_are_coerced_not_raised():
    result = normalize_response(json.dumps({
        "possibleIssues": "Dirty coil",
        "troubleshooting": "Clean it",
        "repairComplexity": 3,
        "possibleIssuesExtra": None,
    }))
    assert result.possible_issues == []
    assert result.troubleshooting == []
    assert result.repair_complexity == RepairComplexity.UNKNOWN


def test_string_issues_and_bad_likelihood():
    result = normalize_response(json.dumps({
        "possibleIssues": ["Tripped breaker", {"issue": "Fan", "likelihood": "85%"}, {"issue": "Coil", "likelihood": "high"}],
    }))
    assert result.possible_issues[0].issue == "Tripped breaker"
    assert result.possible_issues[1].likelihood == 85
    assert result.possible_issues[2].likelihood is None


def test_none_and_empty_input():
    assert normalize_response(None).primary_issue == UNPARSED_PRIMARY_ISSUE
    assert normalize_response("").primary_issue == UNPARSED_PRIMARY_ISSUE


def test_out_of_range_likelihood_is_dropped():
    for raw in ("1e999", "Infinity", "-Infinity", "NaN", "9" * 400):
        result = normalize_response('{"primaryIssue": "Fan", "possibleIssues": [{"issue": "Fan", "likelihood": %s}]}' % raw)
        assert result.primary_issue == "Fan"
        assert result.possible_issues[0].likelihood is None

    assert normalize_response(json.dumps({"possibleIssues": [{"likelihood": "inf%"}]})).possible_issues[0].likelihood is None
