from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field

from .errors import FeedError, InvalidTransfer, LedgerError, StoreError
from .service import BankerService, now_ms
from .views import dashboard, operations_view


log = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


class TransferRequest(BaseModel):
    amount: float = Field(gt=0)
    sender: str = Field(min_length=1)
    receiver: str = Field(min_length=1)


def create_app(service: BankerService, static_dir: Optional[Path] = STATIC_DIR) -> FastAPI:
    app = FastAPI(title="Co-op Banker")
    if static_dir is not None and static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    @app.get("/")
    def root() -> FileResponse:
        index = static_dir / "index.html" if static_dir is not None else None
        if index is None or not index.exists():
            raise HTTPException(status_code=404, detail="dashboard page not installed")
        return FileResponse(str(index))

    @app.get("/api/ledger")
    def ledger() -> Dict[str, Any]:
        return dashboard(service.snapshot, now_ms())

    @app.get("/api/operations")
    def operations(limit: int = Query(default=25, ge=1, le=1000)) -> Dict[str, Any]:
        state = service.snapshot
        return {"total": len(state.journal), "operations": operations_view(state, limit)}

    @app.post("/api/reload")
    def reload() -> Dict[str, Any]:
        log.info("WS ACTION: reloading")
        try:
            result = service.refresh()
        except FeedError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        except LedgerError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except StoreError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return {
            "new_operations": result.new_operations,
            "anomaly": result.anomaly,
            "drift": result.state.drift,
            "drift_exceeded": result.drift_exceeded,
        }

    @app.post("/api/transfer")
    def transfer(req: TransferRequest) -> Dict[str, Any]:
        log.info("WS ACTION: transfer")
        try:
            timestamp, operation = service.transfer(req.amount, req.sender, req.receiver)
        except InvalidTransfer as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except StoreError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return {"timestamp": timestamp, "description": operation.describe()}

    return app
