# Chat relay: system prompt assembly, streamed passthrough to Ollama, health check

from ruleboard.chat.context import load_root_graph, read_tech_stack, summarize_architecture
from ruleboard.chat.prompt import build_system_prompt
from ruleboard.chat.relay import ChatRelay
from ruleboard.chat.status import PREFERRED_MODELS, check_model_status, pick_model

__all__ = [
    "load_root_graph",
    "read_tech_stack",
    "summarize_architecture",
    "build_system_prompt",
    "ChatRelay",
    "PREFERRED_MODELS",
    "check_model_status",
    "pick_model",
]
