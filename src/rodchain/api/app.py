from __future__ import annotations

import uuid
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from rodchain.api.routes_units import router as units_router
from rodchain.observability import bind_run_id, log_event, reset_run_id
from rodchain.version import __version__

app = FastAPI(title="rodchain API", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(units_router)


@app.middleware("http")
async def attach_run_id(request: Request, call_next):
    run_id = request.headers.get("X-Run-ID") or str(uuid.uuid4())
    token = bind_run_id(run_id)
    log_event("request.start", path=str(request.url.path))
    try:
        response = await call_next(request)
        response.headers["X-Run-ID"] = run_id
        return response
    finally:
        log_event("request.end", path=str(request.url.path))
        reset_run_id(token)


@app.get("/health")
def health() -> Dict[str, Any]:
    return {"ok": True, "status": "ok", "version": __version__}
