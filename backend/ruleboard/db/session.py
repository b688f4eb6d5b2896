import logging

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ruleboard.config import DATABASE_URL
from ruleboard.db.models import ChatLog

logger = logging.getLogger(__name__)


def make_engine(url: str = DATABASE_URL):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, future=True)


engine = make_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def record_chat_turn(session_factory, model: str, rule_id: str, prompt: str, upstream_status: str) -> None:
    """Best effort: a failed insert is logged and never fails the chat turn."""
    try:
        with session_factory() as session:
            session.add(
                ChatLog(
                    model=model,
                    rule_id=rule_id,
                    prompt=prompt,
                    upstream_status=upstream_status,
                )
            )
            session.commit()
    except SQLAlchemyError as e:
        logger.warning("[ChatLog] Could not record chat turn: %s", e)
