"""
Model client base — the contract between the use case and a model service.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ModelClient(ABC):
    """Abstract base class for text-generation clients.

    Unlike a receipt-returning adapter, a model client RAISES on failure:
    any failed call aborts the whole run, so there is nothing for the
    caller to inspect.

    To create a new client:
        1. Subclass ModelClient
        2. Implement name and generate
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The client identifier (e.g., 'ollama', 'mock')."""

    @abstractmethod
    def generate(self, model: str, prompt: str) -> str:
        """Send one prompt and return the model's full completion.

        Raises:
            EndpointUnreachable: No connection could be made.
            EndpointError:       The service answered with an error status.
            MalformedResponse:   The reply carried no usable text.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
