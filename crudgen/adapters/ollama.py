"""
Ollama client — one non-streaming call to a local ``/api/generate``.

Request body::

    {"model": "<name>", "prompt": "<text>", "stream": false}

Expected reply: a JSON object with a ``response`` string.  Exactly one
attempt is made per call; there is no retry.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.request

from crudgen import __version__
from crudgen.adapters.base import ModelClient
from crudgen.core.errors import EndpointError, EndpointUnreachable, MalformedResponse

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://localhost:11434/api/generate"


class OllamaClient(ModelClient):
    """Model client for an Ollama-compatible generate endpoint.

    Args:
        endpoint: Full URL of the generate endpoint.
        timeout:  Socket timeout in seconds, or None to wait indefinitely.
    """

    def __init__(self, endpoint: str = DEFAULT_ENDPOINT, timeout: float | None = None):
        self.endpoint = endpoint
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "ollama"

    def generate(self, model: str, prompt: str) -> str:
        body = json.dumps({"model": model, "prompt": prompt, "stream": False})
        req = urllib.request.Request(
            self.endpoint,
            data=body.encode("utf-8"),
            method="POST",
            headers={
                "Content-Type": "application/json",
                "User-Agent": f"crudgen/{__version__}",
            },
        )
        logger.debug("POST %s model=%s prompt=%d chars", self.endpoint, model, len(prompt))

        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            raise EndpointError(model, e.code, str(e.reason or "")) from e
        except http.client.HTTPException as e:
            # garbled status line or truncated body
            raise MalformedResponse(
                f"Invalid HTTP reply from {self.endpoint}: {e!r}"
            ) from e
        except urllib.error.URLError as e:
            raise EndpointUnreachable(
                f"Failed to connect to Ollama at {self.endpoint}: {e.reason}"
            ) from e
        except OSError as e:
            # timeouts and resets surface as plain OSError subclasses
            raise EndpointUnreachable(
                f"Failed to connect to Ollama at {self.endpoint}: {e}"
            ) from e

        logger.debug("Reply from %s: %d bytes", model, len(raw))
        return _extract_text(model, raw)


def _extract_text(model: str, raw: bytes) -> str:
    """Pull the ``response`` field out of a generate reply."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedResponse(f"Reply from {model} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponse(
            f"Expected a JSON object from {model}, got {type(data).__name__}"
        )

    text = data.get("response")
    if not isinstance(text, str):
        raise MalformedResponse(f"Reply from {model} has no 'response' text")
    return text
