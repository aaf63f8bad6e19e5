import hvac_diag.agent.equipment as equipment
from hvac_diag.agent.equipment import FALLBACK_INFO_NOTE, parse_equipment_info


def test_fenced_json():
    text = 'Here you go:\n```json\n{"brand": "Trane", "model": "XR13", "tonnage": "3"}\n```'
    info = parse_equipment_info(text)

    assert info["brand"] == "Trane"
    assert info["model"] == "XR13"
    assert info["tonnage"] == "3"
    assert info["serialNumber"] == ""


def test_bare_object_in_text():
    info = parse_equipment_info('The label shows {"brand": "Carrier", "age": null}.')
    assert info["brand"] == "Carrier"
    assert info["age"] == ""


def test_regex_fallback():
    info = parse_equipment_info("Brand: Lennox, Model: EL16XC1 and a faded serial plate")

    assert info["brand"] == "Lennox"
    assert info["model"] == "EL16XC1"
    assert info["additionalInfo"] == FALLBACK_INFO_NOTE


def test_nothing_recognisable():
    info = parse_equipment_info("blurry photo")
    assert info["brand"] == ""
    assert info["model"] == ""


def test_analyze_equipment_image(monkeypatch):
    seen = {}

    def fake_complete(messages, model):
        seen["model"] = model
        seen["url"] = messages[1].content[1]["image_url"]["url"]
        return '{"brand": "Goodman"}'

    monkeypatch.setattr(equipment, "complete", fake_complete)
    out = equipment.analyze_equipment_image(b"\x89PNG", "image/png")

    assert out["systemInfo"]["brand"] == "Goodman"
    assert out["rawAnalysis"] == '{"brand": "Goodman"}'
    assert seen["url"].startswith("data:image/png;base64,")
