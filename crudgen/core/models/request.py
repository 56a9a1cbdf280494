"""
Generation request — what the user asked for.

Captured once from the interactive prompts (or CLI options) and never
modified afterwards.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator


class Language(StrEnum):
    """Target programming languages offered to the user."""

    PYTHON = "Python"
    JAVA = "Java"
    CPP = "C++"
    JAVASCRIPT = "JavaScript"


class Database(StrEnum):
    """Databases the generated API can be built on."""

    MONGODB = "MongoDB"
    MYSQL = "MySQL"
    POSTGRESQL = "PostgreSQL"


class GenerationRequest(BaseModel):
    """The three answers that drive a generation run.

    Attributes:
        language:    Target language of the generated project.
        database:    Database the API talks to.
        description: Free-text description of what the API should do.
    """

    model_config = ConfigDict(frozen=True)

    language: Language
    database: Database
    description: str

    @field_validator("description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description must not be empty")
        return value

    def summary(self) -> str:
        """One-line natural-language statement of the request."""
        return (
            f"Build a {self.language} CRUD API using {self.database}. "
            f"The API should: {self.description}"
        )
