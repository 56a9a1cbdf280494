"""
Mock model client — scripted replies for tests and offline runs.

Replies are configured per model name; every call is recorded so tests
can assert which prompts were sent, and in what order.
"""

from __future__ import annotations

from crudgen.adapters.base import ModelClient
from crudgen.core.errors import CrudGenError


class MockModelClient(ModelClient):
    """Model client that answers from a per-model script.

    A scripted value may be a string (returned) or a ``CrudGenError``
    instance (raised), which lets tests simulate endpoint failures at
    a given stage.
    """

    def __init__(
        self,
        responses: dict[str, str | CrudGenError] | None = None,
        default_response: str = "",
    ):
        self._responses: dict[str, str | CrudGenError] = dict(responses or {})
        self._default_response = default_response
        self._call_log: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def call_log(self) -> list[tuple[str, str]]:
        """All (model, prompt) pairs this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def set_response(self, model: str, response: str) -> None:
        self._responses[model] = response

    def set_failure(self, model: str, error: CrudGenError) -> None:
        """Make every call for ``model`` raise ``error``."""
        self._responses[model] = error

    def generate(self, model: str, prompt: str) -> str:
        self._call_log.append((model, prompt))
        response = self._responses.get(model, self._default_response)
        if isinstance(response, CrudGenError):
            raise response
        return response
