"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the Task backend. Controllers
are intentionally thin: they accept requests, delegate to services, and
return JSON responses.

Endpoints implemented (task routes sit under the optional `API_PREFIX`):
- GET /task
- GET /task/{task_id}
- POST /task
- PUT /task/{task_id}
- DELETE /task/{task_id}
- GET /health
- GET /health/db
"""

from typing import List, Optional
import json
import logging
import time
import uuid

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from .config import settings
from .database import check_connection, create_db_and_tables, get_session
from . import services
from .schemas import TaskIn, TaskOut

logger = logging.getLogger("task_api.api")
if not logging.getLogger().handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(title="Task CRUD API")
router = APIRouter(prefix="/task", tags=["task"])

# Wide-open CORS keeps local frontends working without extra config in dev.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

if settings.DB_SYNCHRONIZE:
    create_db_and_tables()


def _request_log_payload(request: Request, req_id: str, started: float, **extra) -> str:
    payload = {
        "request_id": req_id,
        "path": request.url.path,
        "method": request.method,
        **extra,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
        "client": request.client.host if request.client else "unknown",
    }
    return json.dumps(payload, ensure_ascii=True)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("request_failed %s", _request_log_payload(request, req_id, started))
        raise
    response.headers["X-Request-ID"] = req_id
    logger.info(
        "request_done %s",
        _request_log_payload(request, req_id, started, status_code=response.status_code),
    )
    return response


@router.get("", response_model=List[TaskOut])
def find_all(db: Session = Depends(get_session)):
    return services.TaskService(db).find_all()


@router.get("/{task_id}", response_model=Optional[TaskOut])
def find_one(task_id: str, db: Session = Depends(get_session)):
    """Return the task or `null`; an unknown id is not an error."""
    return services.TaskService(db).find_one(task_id)


@router.post("", response_model=TaskOut, status_code=201)
def create(payload: TaskIn, db: Session = Depends(get_session)):
    return services.TaskService(db).create(payload)


@router.put("/{task_id}", response_model=Optional[TaskOut])
def update(task_id: str, payload: TaskIn, db: Session = Depends(get_session)):
    return services.TaskService(db).update(task_id, payload)


@router.delete("/{task_id}", status_code=204)
def remove(task_id: str, db: Session = Depends(get_session)):
    services.TaskService(db).remove(task_id)
    return Response(status_code=204)


app.include_router(router, prefix=settings.API_PREFIX)


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/health/db")
def health_db():
    try:
        check_connection()
    except Exception:
        logger.exception("database health check failed")
        raise HTTPException(status_code=500, detail="Database connection failed")
    return {"ok": True}
