# backend/ruleboard/chat/relay.py
"""
Chat Relay - forwards one chat turn to the local Ollama server

The upstream response body is passed through chunk by chunk without being
buffered, parsed or rewritten.
"""

import logging
from typing import Dict, Iterator, List, Optional

import requests

from ruleboard.config import OLLAMA_BASE_URL, OLLAMA_MODEL
from ruleboard.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


class ChatRelay:
    def __init__(
        self,
        base_url: str = OLLAMA_BASE_URL,
        model: str = OLLAMA_MODEL,
        timeout: float = 300,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout

    def build_payload(
        self,
        messages: List[Dict[str, str]],
        system_prompt: str,
        model: Optional[str] = None,
    ) -> Dict:
        return {
            "model": model or self.model,
            "messages": [{"role": "system", "content": system_prompt}, *messages],
            "stream": True,
        }

    def open_stream(
        self,
        messages: List[Dict[str, str]],
        system_prompt: str,
        model: Optional[str] = None,
    ) -> Iterator[bytes]:
        """
        Start the upstream request and return an iterator over its raw body.

        Raises UpstreamUnavailable before any byte is returned when Ollama is
        unreachable or answers with a non-success status.
        """
        payload = self.build_payload(messages, system_prompt, model)

        try:
            response = requests.post(
                f"{self.base_url}/api/chat",
                json=payload,
                stream=True,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("[Relay] Ollama unreachable at %s: %s", self.base_url, e)
            raise UpstreamUnavailable() from e

        if not response.ok:
            logger.error("[Relay] Ollama answered %s for model %s", response.status_code, payload["model"])
            response.close()
            raise UpstreamUnavailable()

        return self._passthrough(response)

    @staticmethod
    def _passthrough(response: requests.Response) -> Iterator[bytes]:
        try:
            for chunk in response.iter_content(chunk_size=None):
                if chunk:
                    yield chunk
        finally:
            response.close()
