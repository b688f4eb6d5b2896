"""
FastAPI dependencies. Everything is built per request from config; the only
state shared between requests is the files on disk.
"""

from pathlib import Path

from fastapi import Depends

from ruleboard import config
from ruleboard.chat.relay import ChatRelay
from ruleboard.db.session import SessionLocal
from ruleboard.rules.catalog import RulesCatalog
from ruleboard.rules.defaults import default_rules
from ruleboard.rules.models import Rule
from ruleboard.store.collections import CollectionStore
from ruleboard.store.views import ViewStore
from ruleboard.timeline.defaults import default_phases
from ruleboard.timeline.models import TimelinePhase
from ruleboard.timeline.service import Timeline

RULES_FILE_NAME = "rules.json"
TIMELINE_FILE_NAME = "timeline.json"


def get_data_dir() -> Path:
    return config.DATA_DIR


def get_view_store(data_dir: Path = Depends(get_data_dir)) -> ViewStore:
    return ViewStore(data_dir)


def get_rules_catalog(data_dir: Path = Depends(get_data_dir)) -> RulesCatalog:
    store = CollectionStore(data_dir / RULES_FILE_NAME, Rule, default_rules)
    return RulesCatalog(store)


def get_timeline(data_dir: Path = Depends(get_data_dir)) -> Timeline:
    store = CollectionStore(data_dir / TIMELINE_FILE_NAME, TimelinePhase, default_phases)
    return Timeline(store)


def get_chat_relay() -> ChatRelay:
    return ChatRelay(base_url=config.OLLAMA_BASE_URL, model=config.OLLAMA_MODEL)


def get_manifest_path() -> Path:
    return config.MANIFEST_PATH


def get_session_factory():
    return SessionLocal
