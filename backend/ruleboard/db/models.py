from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

class ChatLog(Base):
    __tablename__ = "chat_logs"

    id = Column(Integer, primary_key=True)
    model = Column(String(200), nullable=False)
    rule_id = Column(String(64))
    prompt = Column(Text)
    upstream_status = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
