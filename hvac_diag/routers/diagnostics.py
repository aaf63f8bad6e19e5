import copy

from fastapi import APIRouter, Query  # type: ignore
from fastapi.responses import JSONResponse  # type: ignore

from hvac_diag.data import COMMON_ISSUES, get_system_type_name

router = APIRouter(
    prefix="/api",
    tags=["Reference Data"]
)

CACHE_HEADERS = {"Cache-Control": "public, max-age=86400"}


@router.get("/diagnostics")
def get_common_issues(system_type: str = Query("all", alias="systemType")):
    if system_type != "all" and system_type in COMMON_ISSUES:
        body = {
            "systemType": system_type,
            "issues": copy.deepcopy(COMMON_ISSUES[system_type]),
        }
    else:
        body = copy.deepcopy(COMMON_ISSUES)

    return JSONResponse(content=body, headers=CACHE_HEADERS)


@router.get("/system-types/{code}")
def system_type_name(code: str):
    return {"code": code, "name": get_system_type_name(code)}
