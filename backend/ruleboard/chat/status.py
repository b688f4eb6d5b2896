import logging
from typing import Any, Dict, List

import requests

from ruleboard.config import OLLAMA_BASE_URL

logger = logging.getLogger(__name__)

# First match wins; otherwise the first installed model is used
PREFERRED_MODELS = ["llama3", "llama3:latest", "mistral", "gemma", "llama2"]


def pick_model(model_names: List[str]) -> str:
    for preferred in PREFERRED_MODELS:
        for name in model_names:
            if preferred in name:
                return name
    return model_names[0]


def check_model_status(base_url: str = OLLAMA_BASE_URL, timeout: float = 5) -> Dict[str, Any]:
    """
    Ping Ollama and its model list.

    Returns {"status": "ok", "model": ...} or {"status": "error", "message": ...}.
    """
    base_url = base_url.rstrip("/")
    try:
        root = requests.get(f"{base_url}/", timeout=timeout)
        if not root.ok:
            return {"status": "error", "message": "Ollama not reachable"}

        tags = requests.get(f"{base_url}/api/tags", timeout=timeout)
        if not tags.ok:
            return {"status": "error", "message": "Could not fetch models"}

        models = tags.json().get("models") or []
    except (requests.RequestException, ValueError) as e:
        logger.warning("[Status] Ollama check failed: %s", e)
        return {"status": "error", "message": "Connection failed"}

    names = [m.get("name", "") for m in models if m.get("name")]
    if not names:
        return {"status": "error", "message": "No models found"}

    return {"status": "ok", "model": pick_model(names)}
