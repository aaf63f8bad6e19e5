import logging
import re
import time
from typing import Any, Dict, Optional

import requests

from hvac_diag.config import FIELD_SERVICE_TIMEOUT_SECONDS, ZUPER_API_KEY, ZUPER_REGION
from hvac_diag.models.diagnosis import DiagnosisResult

log = logging.getLogger(__name__)

_UUID_RE = re.compile(r"([a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12})", re.IGNORECASE)


class FieldServiceError(Exception):
    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


# -------------------------------------------------
# Helpers
# -------------------------------------------------

def _is_success_message(data: Dict[str, Any]) -> bool:
    message = data.get("message")
    return isinstance(message, str) and "success" in message.lower()


def extract_record_id(data: Any) -> Optional[str]:
    """
    The API reports new record ids in several places depending on the
    record type. Returns None when nothing id-like is present.
    """
    if not isinstance(data, dict):
        return None

    if data.get("customer_uid"):
        return str(data["customer_uid"])

    nested = data.get("data")
    if isinstance(nested, dict):
        for key in ("property_uid", "asset_uid", "job_uid", "asset_id", "job_id"):
            if nested.get(key):
                return str(nested[key])

    for key in ("id", "asset_id", "job_id"):
        if data.get(key):
            return str(data[key])

    if _is_success_message(data):
        match = _UUID_RE.search(data["message"])
        if match:
            return match.group(1)

        log.warning("Success message without an id, using a temporary id")
        return f"temp-{int(time.time() * 1000)}"

    return None


def _custom_fields(pairs) -> list:
    return [{"label": label, "value": str(value or "")} for label, value in pairs]


def summarize_diagnosis(result: Optional[DiagnosisResult]) -> list:
    if result is None:
        return _custom_fields([
            ("Diagnostic Result", ""),
            ("Required Parts", ""),
            ("Repair Complexity", ""),
            ("Additional Notes", ""),
        ])

    return _custom_fields([
        ("Diagnostic Result", "; ".join(f"{i.issue} ({i.severity.value})" for i in result.possible_issues)),
        ("Required Parts", ", ".join(result.required_items)),
        ("Repair Complexity", result.repair_complexity.value),
        ("Additional Notes", result.additional_notes),
    ])


# -------------------------------------------------
# Client
# -------------------------------------------------

class FieldServiceClient:
    def __init__(
        self,
        api_key: Optional[str] = ZUPER_API_KEY,
        region: str = ZUPER_REGION,
        timeout: float = FIELD_SERVICE_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = f"https://{region}.zuperpro.com/api"
        self.timeout = timeout
        self.session = session or requests.Session()

    def request(self, endpoint: str, method: str = "GET", params=None, data=None) -> Dict[str, Any]:
        if not self.api_key:
            raise FieldServiceError("Field service API key not configured", status_code=503)

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        log.info("Field service %s %s", method, url)

        try:
            res = self.session.request(
                method,
                url,
                params=params,
                json=data,
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                    "x-api-key": self.api_key,
                },
                timeout=self.timeout,
                allow_redirects=False,
            )
        except requests.Timeout as exc:
            raise FieldServiceError("Gateway Timeout", 504, "No response received from field service API") from exc
        except requests.RequestException as exc:
            raise FieldServiceError("Request Configuration Error", 500, str(exc)) from exc

        # login pages come back as HTML when the key or region is wrong
        if "text/html" in res.headers.get("content-type", ""):
            raise FieldServiceError(
                "Authentication failed - check API key and region settings",
                401,
                "Received HTML instead of JSON",
            )

        if not res.ok:
            try:
                details = res.json()
            except ValueError:
                details = res.text
            log.error("Field service returned %s for %s", res.status_code, url)
            raise FieldServiceError(res.reason or "Field service error", res.status_code, details)

        try:
            return res.json()
        except ValueError as exc:
            raise FieldServiceError("Field service returned invalid JSON", 502, res.text[:500]) from exc

    def _create(self, endpoint: str, payload: Dict[str, Any], label: str) -> Dict[str, str]:
        response = self.request(endpoint, "POST", data=payload)
        record_id = extract_record_id(response)

        if not record_id:
            log.error("Unexpected %s creation response: %s", label, response)
            raise FieldServiceError(f"Failed to extract {label} ID from response", 502, response)

        message = response.get("message") if isinstance(response.get("message"), str) else None
        return {"id": record_id, "message": message or f"{label.capitalize()} created successfully"}

    def create_customer(self, customer) -> Dict[str, str]:
        payload = {
            "customer": {
                "customer_first_name": customer.first_name,
                "customer_last_name": customer.last_name,
                "customer_email": customer.email,
                "customer_phone": customer.phone,
                "customer_company_name": customer.company_name,
                "customer_address": customer.address,
                "customer_billing_address": customer.billing_address,
                "is_portal_enabled": False,
            }
        }
        return self._create("customers_new", payload, "customer")

    def create_property(self, prop) -> Dict[str, str]:
        payload = {
            "property": {
                "property_name": prop.name,
                "property_type": prop.property_type,
                "property_customers": [{"customer": prop.customer_id}],
                "property_address": prop.address,
                "custom_fields": prop.custom_fields,
            }
        }
        return self._create("properties", payload, "property")

    def create_asset(self, asset) -> Dict[str, str]:
        body = {
            "asset_name": asset.name,
            "asset_category": asset.asset_category,
            "customer": asset.customer_id,
            "property": asset.property_id,
            "asset_serial_number": asset.serial_number,
            "purchase_date": asset.installation_date,
            "warranty_expiry_date": asset.warranty_expiry_date,
            "custom_fields": _custom_fields([
                ("Manufacturer", asset.manufacturer),
                ("Model", asset.model),
                ("System Type", asset.system_type),
                ("Tonnage", asset.tonnage),
                ("Efficiency Rating", asset.efficiency_rating),
            ]),
        }
        payload = {"asset": {k: v for k, v in body.items() if v is not None}}
        return self._create("assets", payload, "asset")

    def create_job(self, job) -> Dict[str, str]:
        body = {
            "customer_id": job.customer_id,
            "property_id": job.property_id,
            "job_title": job.title,
            "job_description": job.description,
            "job_category": job.job_category,
            "priority": job.priority,
            "status": job.status,
            "due_date": job.due_date,
            "assets": job.asset_ids,
            "custom_fields": summarize_diagnosis(job.diagnostic_result),
        }
        payload = {"job": {k: v for k, v in body.items() if v is not None}}
        return self._create("jobs", payload, "job")


def get_field_service_client() -> FieldServiceClient:
    return FieldServiceClient()
