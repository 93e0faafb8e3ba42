"""FastAPI application for the ROI calculator — form session endpoints and SSE streaming."""

from __future__ import annotations

import logging
from typing import Optional, Union

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel

from itops_roi import __version__
from itops_roi.catalog.loader import load_catalog
from itops_roi.config.settings import get_settings
from itops_roi.engine.calculator import CalculationEngine
from itops_roi.presentation.views import (
    ResultsView,
    SessionView,
    build_results_view,
    build_session_view,
)
from itops_roi.session.errors import (
    SessionNotFoundError,
    UnknownFieldError,
    UnknownUseCaseError,
)
from itops_roi.session.store import SessionStore
from itops_roi.streaming import StreamManager

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="IT Operations ROI Calculator API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

catalog = load_catalog(settings.catalog_path)
engine = CalculationEngine(catalog.definitions())

# Singleton stream manager
stream_manager = StreamManager(buffer_size=settings.event_buffer_size)

# In-memory form sessions, gone on restart
session_store = SessionStore(stream_manager=stream_manager, settings=settings, engine=engine)

NumericField = Union[float, str, None]


class UseCaseEntry(BaseModel):
    name: str
    savings_percent: float


class OrganizationUpdate(BaseModel):
    company_name: Optional[str] = None
    business_sector: Optional[str] = None
    it_employee_cost: NumericField = None


class UseCaseUpdate(BaseModel):
    selected: Optional[bool] = None
    ftes: NumericField = None
    hours_per_day: NumericField = None


class SubscriptionCostUpdate(BaseModel):
    subscription_cost: NumericField = ""


class MutationResponse(BaseModel):
    session_id: str
    status: str


def _mutation_response(session_id: str, scheduled: bool) -> MutationResponse:
    return MutationResponse(
        session_id=session_id,
        status="recalculation_scheduled" if scheduled else "updated",
    )


@app.exception_handler(SessionNotFoundError)
async def session_not_found_handler(request: Request, exc: SessionNotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(UnknownUseCaseError)
async def unknown_use_case_handler(request: Request, exc: UnknownUseCaseError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(UnknownFieldError)
async def unknown_field_handler(request: Request, exc: UnknownFieldError):
    return JSONResponse(status_code=422, content={"error": str(exc)})


@app.get("/api/use-cases", response_model=list[UseCaseEntry])
async def list_use_cases():
    """Return the fixed use-case catalog in display order."""
    return [
        UseCaseEntry(name=uc.name, savings_percent=uc.savings_percent)
        for uc in engine.use_cases
    ]


@app.post("/api/sessions", response_model=SessionView)
async def create_session():
    """Open a new calculator form with default inputs."""
    session = await session_store.create()
    return build_session_view(session)


@app.get("/api/sessions/{session_id}", response_model=SessionView)
async def get_session(session_id: str):
    """Return every tab of the form, after any pending recalculation lands."""
    session = session_store.get(session_id)
    await session.settle()
    return build_session_view(session)


@app.delete("/api/sessions/{session_id}")
async def close_session(session_id: str):
    await session_store.close(session_id)
    return {"session_id": session_id, "status": "closed"}


@app.patch(
    "/api/sessions/{session_id}/organization",
    response_model=MutationResponse,
    status_code=202,
)
async def update_organization(session_id: str, body: OrganizationUpdate):
    session = session_store.get(session_id)
    scheduled = False
    for field_name, value in body.model_dump(exclude_unset=True).items():
        scheduled = await session.update_organization(field_name, value) or scheduled
    return _mutation_response(session_id, scheduled)


@app.patch(
    "/api/sessions/{session_id}/use-cases/{name:path}",
    response_model=MutationResponse,
    status_code=202,
)
async def update_use_case(session_id: str, name: str, body: UseCaseUpdate):
    session = session_store.get(session_id)
    if name not in session.selections:
        raise UnknownUseCaseError(name)
    scheduled = False
    for field_name, value in body.model_dump(exclude_unset=True).items():
        scheduled = await session.update_use_case(name, field_name, value) or scheduled
    return _mutation_response(session_id, scheduled)


@app.put(
    "/api/sessions/{session_id}/subscription-cost",
    response_model=MutationResponse,
    status_code=202,
)
async def set_subscription_cost(session_id: str, body: SubscriptionCostUpdate):
    session = session_store.get(session_id)
    scheduled = await session.set_subscription_cost(body.subscription_cost)
    return _mutation_response(session_id, scheduled)


@app.get("/api/sessions/{session_id}/results", response_model=ResultsView)
async def get_results(session_id: str):
    """Results tab. Unavailable until at least one use case is selected."""
    session = session_store.get(session_id)
    if not session.has_selection:
        return JSONResponse(
            status_code=409,
            content={"error": "Select at least one use case to view results"},
        )
    await session.settle()
    return build_results_view(session)


@app.get("/api/sessions/{session_id}/stream")
async def stream_session(session_id: str, request: Request):
    """SSE endpoint — streams input changes and recalculated results."""
    session_store.get(session_id)

    last_event_id: int | None = None
    raw = request.headers.get("Last-Event-ID") or request.headers.get("last-event-id")
    if raw is not None:
        try:
            last_event_id = int(raw)
        except ValueError:
            pass

    generator = stream_manager.event_generator(session_id, last_event_id=last_event_id)
    return StreamingResponse(generator, media_type="text/event-stream")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}
