from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from paydesk.desk import Desk, get_desk

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_root():
    return {"ok": True}


@router.get("/storage")
def health_storage(desk: Desk = Depends(get_desk)):
    store = desk.state.store
    ok = store.ping()
    return JSONResponse({"ok": ok, "backend": type(store).__name__}, status_code=200 if ok else 503)
