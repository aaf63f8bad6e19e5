from typing import Any, Dict, List, Optional

from pydantic import Field # type: ignore

from hvac_diag.models.diagnosis import CamelModel, DiagnosisResult


class CustomerCreate(CamelModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    company_name: str = ""
    address: Optional[Dict[str, Any]] = None
    billing_address: Optional[Dict[str, Any]] = None


class PropertyCreate(CamelModel):
    customer_id: str
    name: str = "Primary Property"
    property_type: str = "residential"
    address: Optional[Dict[str, Any]] = None
    custom_fields: List[Dict[str, Any]] = Field(default_factory=list)


class AssetCreate(CamelModel):
    customer_id: str
    property_id: str
    name: str = "HVAC System"
    asset_category: Optional[str] = None
    manufacturer: str = ""
    model: str = ""
    serial_number: str = ""
    system_type: str = ""
    tonnage: str = ""
    efficiency_rating: str = ""
    installation_date: Optional[str] = None
    warranty_expiry_date: Optional[str] = None


class JobCreate(CamelModel):
    customer_id: str
    property_id: str
    title: str = "HVAC Service"
    description: str = ""
    job_category: Optional[str] = None
    priority: str = "medium"
    status: str = "new"
    due_date: Optional[str] = None
    asset_ids: List[str] = Field(default_factory=list)
    diagnostic_result: Optional[DiagnosisResult] = None


class RecordCreated(CamelModel):
    id: str
    message: str
