"""
Domain models — Pydantic types for crudgen.

All models are re-exported here for convenient access:

    from crudgen.core.models import GenerationRequest, FileBlock
"""

from crudgen.core.models.file_block import FileBlock
from crudgen.core.models.request import Database, GenerationRequest, Language
from crudgen.core.models.result import MaterializationResult

__all__ = [
    "Database",
    "FileBlock",
    "GenerationRequest",
    "Language",
    "MaterializationResult",
]
