"""
Adapters — the boundary between crudgen and external model services.

The use case only talks to a ``ModelClient``; swapping the real Ollama
client for ``MockModelClient`` needs no other change.
"""

from crudgen.adapters.base import ModelClient
from crudgen.adapters.mock import MockModelClient
from crudgen.adapters.ollama import OllamaClient

__all__ = ["MockModelClient", "ModelClient", "OllamaClient"]
