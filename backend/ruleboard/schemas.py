from pydantic import BaseModel
from typing import Optional, List


class ChatMessage(BaseModel):
    role: str  # user | assistant
    content: str


class RuleRecord(BaseModel):
    """Rule record as sent by the dashboard"""
    id: str
    title: str = ""
    description: str = ""
    indicators: List[str] = []
    section: str = ""  # General Banking | Credit | Trade | Remittance
    type: str = ""  # Hard Logic | AI Agents | AI-RAG
    risk: str = "Unknown"


class ChatRequest(BaseModel):
    messages: List[ChatMessage]
    context: RuleRecord  # Rule the conversation is about
    model: Optional[str] = None  # Falls back to OLLAMA_MODEL


class StatusResponse(BaseModel):
    status: str  # ok | error
    model: Optional[str] = None
    message: Optional[str] = None
