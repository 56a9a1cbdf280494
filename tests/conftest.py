"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from crudgen.adapters.mock import MockModelClient
from crudgen.core.context import set_workspace_root
from crudgen.core.models.request import Database, GenerationRequest, Language

INTERPRET_MODEL = "llama3.1:8b"
GENERATE_MODEL = "codellama:13b"

SPEC_REPLY = """
Project structure: index.js, models/user.js
Framework: Express with Mongoose
Entities: User
"""

CODE_REPLY = (
    "```file: index.js\n"
    "const express = require('express');\n"
    "const app = express();\n"
    "```\n"
    "```file: models/user.js\n"
    "module.exports = { name: String };\n"
    "```\n"
)


@pytest.fixture(autouse=True)
def _reset_workspace_context():
    """Keep the module-level workspace root from leaking between tests."""
    set_workspace_root(None)
    yield
    set_workspace_root(None)


@pytest.fixture(autouse=True)
def _reset_package_log_level():
    """CLI runs reconfigure logging; undo the package level they set."""
    yield
    logging.getLogger("crudgen").setLevel(logging.NOTSET)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Return an empty directory to generate into."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def users_request() -> GenerationRequest:
    return GenerationRequest(
        language=Language.JAVASCRIPT,
        database=Database.MONGODB,
        description="manage users",
    )


@pytest.fixture
def mock_client() -> MockModelClient:
    """Model client scripted with a plan and a two-file project."""
    return MockModelClient(responses={
        INTERPRET_MODEL: SPEC_REPLY,
        GENERATE_MODEL: CODE_REPLY,
    })


@pytest.fixture
def code_reply() -> str:
    return CODE_REPLY
