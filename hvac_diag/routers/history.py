from fastapi import APIRouter, Depends, HTTPException  # type: ignore

from hvac_diag.db.history import get_history_store, make_entry, newest_first
from hvac_diag.models.history import HistoryEntryCreate

router = APIRouter(prefix="/api/history", tags=["Saved Diagnostics"])


@router.get("")
def list_history(store=Depends(get_history_store)):
    return newest_first(store.load())


@router.post("", status_code=201)
def save_history(payload: HistoryEntryCreate, store=Depends(get_history_store)):
    entry = make_entry(
        system_type=payload.system_type,
        system_info=payload.system_info,
        symptoms=payload.symptoms,
        result=payload.result.to_wire(),
        entry_id=payload.id,
        timestamp=payload.timestamp,
    )

    if not store.save(entry):
        raise HTTPException(status_code=500, detail="Could not save diagnostic")

    return entry


@router.delete("/{entry_id}")
def delete_history(entry_id: str, store=Depends(get_history_store)):
    if not store.delete(entry_id):
        raise HTTPException(status_code=404, detail="Diagnostic not found")

    return {"deleted": entry_id}
