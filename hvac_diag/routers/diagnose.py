import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Response  # type: ignore
from fastapi.responses import JSONResponse  # type: ignore

from hvac_diag.agent.diagnosis_agent import CompletionError, run_diagnosis
from hvac_diag.agent.offline import resolve_offline
from hvac_diag.db.history import get_history_store
from hvac_diag.models.diagnosis import DiagnoseRequest

log = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/diagnose",
    tags=["Diagnose"]
)

SYMPTOMS_REQUIRED = {"error": "Symptoms are required"}


def _missing_symptoms(req: Optional[DiagnoseRequest]) -> bool:
    # an empty POST body counts as missing symptoms, not a schema error
    return req is None or not (req.symptoms or "").strip()


@router.head("")
def head_diagnose():
    return Response(status_code=200)


@router.post("")
def diagnose(req: Optional[DiagnoseRequest] = Body(None)):
    if _missing_symptoms(req):
        return JSONResponse(status_code=400, content=SYMPTOMS_REQUIRED)

    try:
        result = run_diagnosis(req.system_type, req.system_info, req.symptoms)
    except CompletionError as exc:
        log.error("Diagnostic error: %s", exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": "An error occurred while processing the diagnosis. Try again or use offline mode.",
                "details": exc.message,
            },
        )

    return result.to_wire()


@router.post("/offline")
def diagnose_offline(
    req: Optional[DiagnoseRequest] = Body(None),
    store=Depends(get_history_store),
):
    if _missing_symptoms(req):
        return JSONResponse(status_code=400, content=SYMPTOMS_REQUIRED)

    result = resolve_offline(req.system_type, req.system_info, req.symptoms, store.load())
    return result.to_wire()
