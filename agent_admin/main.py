# agent_admin/main.py
from __future__ import annotations

import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agent_admin.services import config
from agent_admin.services.errors import AdminError, DuplicateAgentError, UnknownRoleError, UnknownStatusError
from agent_admin.storage.db import init_db
from agent_admin.utils.request_id import RequestIDMiddleware

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("agent_admin")

# ── Import routers ──
from agent_admin.api import (
    activity,
    agents,
    hierarchy,
    panchayaths,
    reports,
    tasks,
    teams,
    health as health_api,
)

# ── App ──
app = FastAPI(title="Agent Admin", version="1.0.0")

# Optional CORS for local dev UI testing
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost", "http://127.0.0.1", "http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)

# ── APIVersionRewrite middleware: /api/v1/* -> /api/* ──
@app.middleware("http")
async def api_version_rewrite(request: Request, call_next: Callable):
    path: str = request.scope.get("path", "")
    if path.startswith("/api/v1/"):
        # mutate scope for downstream router
        request.scope["path"] = "/api/" + path[len("/api/v1/"):]
    resp: Response = await call_next(request)
    return resp

# ── Error mapping: storage errors carry their status, core contract violations are 400 ──
@app.exception_handler(AdminError)
async def admin_error_handler(request: Request, exc: AdminError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

async def contract_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})

for _exc in (UnknownRoleError, UnknownStatusError, DuplicateAgentError):
    app.add_exception_handler(_exc, contract_error_handler)

# ── Startup: create tables outside prod (prod runs alembic) ──
@app.on_event("startup")
async def on_startup() -> None:
    if config.DB_AUTO_CREATE:
        init_db()
        logger.info("Schema ensured (DB_AUTO_CREATE=1)")

# ── Mount all routers under /api (v1 comes via middleware) ──
app.include_router(panchayaths.router, prefix="/api")
app.include_router(agents.router, prefix="/api")
app.include_router(hierarchy.router, prefix="/api")
app.include_router(tasks.router, prefix="/api")
app.include_router(teams.router, prefix="/api")
app.include_router(activity.router, prefix="/api")
app.include_router(reports.router, prefix="/api")
app.include_router(health_api.router, prefix="")   # /healthz, /readyz

@app.get("/")
def root() -> dict:
    return {"status": "OK", "docs": "/docs"}
