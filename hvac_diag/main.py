import logging

from fastapi import FastAPI  # type: ignore

from hvac_diag.config import LOG_LEVEL
from hvac_diag.middleware.preflight import preflight_middleware
from hvac_diag.routers import diagnose, diagnostics, equipment, field_service, history

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="HVAC Diagnostic Assistant")

app.middleware("http")(preflight_middleware)

app.include_router(diagnose.router)
app.include_router(diagnostics.router)
app.include_router(history.router)
app.include_router(equipment.router)
app.include_router(field_service.router)


@app.get("/")
async def health():
    return {"status": "ok"}
