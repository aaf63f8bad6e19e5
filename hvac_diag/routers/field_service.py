from fastapi import APIRouter, Depends  # type: ignore
from fastapi.responses import JSONResponse  # type: ignore

from hvac_diag.models.field_service import (
    AssetCreate,
    CustomerCreate,
    JobCreate,
    PropertyCreate,
    RecordCreated,
)
from hvac_diag.services.field_service import FieldServiceError, get_field_service_client

router = APIRouter(
    prefix="/api/field-service",
    tags=["Field Service"]
)


def _error(exc: FieldServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details},
    )


@router.post("/customers", response_model=RecordCreated)
def create_customer(payload: CustomerCreate, client=Depends(get_field_service_client)):
    try:
        return client.create_customer(payload)
    except FieldServiceError as exc:
        return _error(exc)


@router.post("/properties", response_model=RecordCreated)
def create_property(payload: PropertyCreate, client=Depends(get_field_service_client)):
    try:
        return client.create_property(payload)
    except FieldServiceError as exc:
        return _error(exc)


@router.post("/assets", response_model=RecordCreated)
def create_asset(payload: AssetCreate, client=Depends(get_field_service_client)):
    try:
        return client.create_asset(payload)
    except FieldServiceError as exc:
        return _error(exc)


@router.post("/jobs", response_model=RecordCreated)
def create_job(payload: JobCreate, client=Depends(get_field_service_client)):
    try:
        return client.create_job(payload)
    except FieldServiceError as exc:
        return _error(exc)
