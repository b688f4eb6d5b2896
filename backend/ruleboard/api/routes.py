import logging
from pathlib import Path
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse, StreamingResponse

from ruleboard.api.deps import (
    get_chat_relay,
    get_manifest_path,
    get_rules_catalog,
    get_session_factory,
    get_timeline,
    get_view_store,
)
from ruleboard.chat.context import load_root_graph, read_tech_stack, summarize_architecture
from ruleboard.chat.prompt import build_system_prompt
from ruleboard.chat.relay import ChatRelay
from ruleboard.chat.status import check_model_status
from ruleboard.db.session import record_chat_turn
from ruleboard.diagram.schema import Graph
from ruleboard.errors import (
    PhaseNotFound,
    RuleNotFound,
    StorageReadError,
    StorageWriteError,
    UpstreamUnavailable,
    ViewNotFound,
)
from ruleboard.rules.catalog import RulesCatalog
from ruleboard.rules.models import Rule, risk_level
from ruleboard.schemas import ChatRequest, RuleRecord, StatusResponse
from ruleboard.store.files import ROOT_VIEW_ID
from ruleboard.store.views import ViewStore
from ruleboard.timeline.models import TimelinePhase
from ruleboard.timeline.service import Timeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


SAVED = {"success": True}


# ============================================================
# ARCHITECTURE VIEWS
# ============================================================

@router.get("/architecture")
def get_architecture(
    view_id: str = Query(ROOT_VIEW_ID, alias="viewId"),
    store: ViewStore = Depends(get_view_store),
):
    """
    Graph document for one view.

    A missing root answers 404 with an empty graph so the client can fall
    back to its factory default; a missing sub-view is simply empty.
    """
    try:
        graph = store.load(view_id)
    except ViewNotFound:
        return JSONResponse(Graph.empty().to_dict(), status_code=404)
    except StorageReadError as e:
        return error_response(str(e), 500)
    return graph.to_dict()


@router.post("/architecture")
@router.put("/architecture")
def save_architecture(
    payload: Any = Body(...),
    view_id: str = Query(ROOT_VIEW_ID, alias="viewId"),
    store: ViewStore = Depends(get_view_store),
):
    try:
        graph = Graph.from_dict(payload)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("[Routes] Rejected graph for view '%s': %s", view_id, e)
        return error_response("Invalid graph document", 400)

    try:
        store.save(view_id, graph)
    except StorageWriteError as e:
        return error_response(str(e), 500)
    return SAVED


@router.get("/architecture/views")
def list_architecture_views(store: ViewStore = Depends(get_view_store)):
    return {"views": store.list_views()}


# ============================================================
# RULES CATALOG
# ============================================================

@router.get("/rules")
def get_rules(catalog: RulesCatalog = Depends(get_rules_catalog)):
    return [r.to_dict() for r in catalog.load_all()]


@router.post("/rules")
def save_rules(
    payload: List[dict] = Body(...),
    catalog: RulesCatalog = Depends(get_rules_catalog),
):
    try:
        rules = [Rule.from_dict(item) for item in payload]
    except (KeyError, TypeError) as e:
        logger.warning("[Routes] Rejected rules document: %s", e)
        return error_response("Invalid rules document", 400)

    try:
        catalog.replace_all(rules)
    except StorageWriteError as e:
        return error_response(str(e), 500)
    return SAVED


@router.get("/rules/search")
def search_rules(
    search: Optional[str] = None,
    section: Optional[str] = None,
    rule_type: Optional[str] = Query(None, alias="type"),
    catalog: RulesCatalog = Depends(get_rules_catalog),
):
    catalog.load_all()
    return [
        {**r.to_dict(), "riskLevel": risk_level(r.risk)}
        for r in catalog.filter(search=search, section=section, rule_type=rule_type)
    ]


@router.get("/rules/stats")
def rules_stats(catalog: RulesCatalog = Depends(get_rules_catalog)):
    catalog.load_all()
    return catalog.stats().to_dict()


@router.get("/rules/{rule_id}")
def get_rule(rule_id: str, catalog: RulesCatalog = Depends(get_rules_catalog)):
    catalog.load_all()
    try:
        rule = catalog.get(rule_id)
    except RuleNotFound as e:
        return error_response(str(e), 404)
    return {**rule.to_dict(), "riskLevel": risk_level(rule.risk)}


@router.put("/rules/{rule_id}")
def save_rule(
    rule_id: str,
    record: RuleRecord,
    catalog: RulesCatalog = Depends(get_rules_catalog),
):
    rule = Rule.from_dict({**record.model_dump(), "id": rule_id})
    try:
        catalog.save_one(rule)
    except RuleNotFound as e:
        return error_response(str(e), 404)
    except StorageWriteError as e:
        return error_response(str(e), 500)
    return SAVED


# ============================================================
# TIMELINE
# ============================================================

@router.get("/timeline")
def get_timeline_phases(timeline: Timeline = Depends(get_timeline)):
    return [p.to_dict() for p in timeline.load()]


@router.post("/timeline")
def save_timeline(
    payload: List[dict] = Body(...),
    timeline: Timeline = Depends(get_timeline),
):
    try:
        phases = [TimelinePhase.from_dict(item) for item in payload]
    except (KeyError, TypeError) as e:
        logger.warning("[Routes] Rejected timeline document: %s", e)
        return error_response("Invalid timeline document", 400)

    try:
        timeline.save(phases)
    except StorageWriteError as e:
        return error_response(str(e), 500)
    return SAVED


@router.post("/timeline/{phase_id}/move")
def move_timeline_phase(
    phase_id: str,
    index: int = Query(..., ge=0),
    timeline: Timeline = Depends(get_timeline),
):
    try:
        phases = timeline.move(phase_id, index)
    except PhaseNotFound as e:
        return error_response(str(e), 404)
    except StorageWriteError as e:
        return error_response(str(e), 500)
    return [p.to_dict() for p in phases]


# ============================================================
# CHAT RELAY
# ============================================================

def _last_user_message(request: ChatRequest) -> str:
    for message in reversed(request.messages):
        if message.role == "user":
            return message.content
    return ""


@router.post("/chat")
def chat(
    request: ChatRequest,
    relay: ChatRelay = Depends(get_chat_relay),
    store: ViewStore = Depends(get_view_store),
    manifest_path: Path = Depends(get_manifest_path),
    session_factory=Depends(get_session_factory),
):
    """
    Relay one chat turn to Ollama.

    The upstream body is streamed back untouched as text/event-stream.
    """
    model = request.model or relay.model
    rule = Rule.from_dict(request.context.model_dump())

    try:
        system_prompt = build_system_prompt(
            rule,
            tech_stack=read_tech_stack(manifest_path),
            architecture_summary=summarize_architecture(load_root_graph(store)),
        )
        messages = [m.model_dump() for m in request.messages]
        stream = relay.open_stream(messages, system_prompt, model=model)
    except UpstreamUnavailable as e:
        record_chat_turn(session_factory, model, rule.id, _last_user_message(request), "unavailable")
        return error_response(str(e), 503)
    except Exception:
        logger.exception("[Routes] Chat API error")
        return error_response("Internal Server Error", 500)

    record_chat_turn(session_factory, model, rule.id, _last_user_message(request), "streaming")

    return StreamingResponse(
        stream,
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )


@router.get("/ollama-status", response_model=StatusResponse, response_model_exclude_none=True)
def ollama_status(relay: ChatRelay = Depends(get_chat_relay)):
    result = check_model_status(relay.base_url)
    if result["status"] != "ok":
        return JSONResponse(result, status_code=503)
    return result
