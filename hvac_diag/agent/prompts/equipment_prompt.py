from langchain_core.messages import SystemMessage, HumanMessage  # type: ignore


def build_equipment_prompt(image_b64: str, content_type: str = "image/jpeg"):
    return [
        SystemMessage(
            content=(
                "You are an HVAC technician assistant that specializes in "
                "identifying HVAC systems from images. Extract model, brand, "
                "age, and other relevant details visible in the image."
            )
        ),
        HumanMessage(
            content=[
                {
                    "type": "text",
                    "text": (
                        "Identify all visible information about this HVAC system. "
                        "Look for brand name, model number, serial number, "
                        "manufacturing date, tonnage, and any other specifications.\n\n"
                        "Return JSON only:\n"
                        "{\n"
                        "  \"brand\": \"...\",\n"
                        "  \"model\": \"...\",\n"
                        "  \"serialNumber\": \"...\",\n"
                        "  \"age\": \"...\",\n"
                        "  \"tonnage\": \"...\",\n"
                        "  \"additionalInfo\": \"...\"\n"
                        "}\n\n"
                        "If you cannot determine a field, leave it as an empty string."
                    ),
                },
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{content_type};base64,{image_b64}"},
                },
            ]
        ),
    ]
