"""
Tests for the generate use case — both model stages, parse and write.

The model endpoint is replaced by MockModelClient.
"""

from pathlib import Path

import pytest

from crudgen.adapters.mock import MockModelClient
from crudgen.core.config.loader import Settings
from crudgen.core.errors import (
    EndpointError,
    EndpointUnreachable,
    MalformedResponse,
    UnsafePath,
    WriteError,
)
from crudgen.core.models.request import GenerationRequest
from crudgen.core.use_cases.generate import run_generate, write_response


class TestRunGenerate:
    def test_end_to_end(self, workspace: Path, users_request: GenerationRequest,
                        mock_client: MockModelClient):
        result = run_generate(users_request, workspace, mock_client)

        assert result.written == ["index.js", "models/user.js"]
        assert (workspace / "index.js").read_text() == (
            "const express = require('express');\nconst app = express();"
        )
        assert (workspace / "models" / "user.js").read_text() == (
            "module.exports = { name: String };"
        )
        assert result.spec.startswith("Project structure")

    def test_call_order_and_prompts(self, workspace: Path, users_request: GenerationRequest,
                                    mock_client: MockModelClient):
        run_generate(users_request, workspace, mock_client)

        (m1, p1), (m2, p2) = mock_client.call_log
        assert m1 == "llama3.1:8b"
        assert "manage users" in p1
        assert m2 == "codellama:13b"
        # Stage 2 is built from the trimmed stage-1 reply
        assert "Project structure: index.js, models/user.js" in p2

    def test_models_from_settings(self, workspace: Path, users_request: GenerationRequest):
        client = MockModelClient(default_response="")
        settings = Settings(interpret_model="planner", generate_model="coder")
        run_generate(users_request, workspace, client, settings=settings)
        assert [m for m, _ in client.call_log] == ["planner", "coder"]

    def test_progress_messages(self, workspace: Path, users_request: GenerationRequest,
                               mock_client: MockModelClient):
        messages: list[str] = []
        run_generate(users_request, workspace, mock_client, on_progress=messages.append)
        assert messages == [
            "Interpreting prompt with llama3.1:8b...",
            "Generating code with codellama:13b...",
        ]

    def test_raw_replies_saved(self, tmp_path: Path, workspace: Path,
                               users_request: GenerationRequest, mock_client: MockModelClient):
        raw_dir = tmp_path / "raw"
        run_generate(users_request, workspace, mock_client, raw_dir=raw_dir)
        assert "Framework: Express" in (raw_dir / "interpretation.txt").read_text()
        assert "```file: index.js" in (raw_dir / "generation.txt").read_text()

    def test_no_blocks_is_success(self, workspace: Path, users_request: GenerationRequest):
        client = MockModelClient(default_response="Sorry, I can't do that.")
        result = run_generate(users_request, workspace, client)
        assert result.written == []
        assert result.materialized is not None and result.materialized.ok
        assert list(workspace.iterdir()) == []

    def test_to_dict(self, workspace: Path, users_request: GenerationRequest,
                     mock_client: MockModelClient):
        data = run_generate(users_request, workspace, mock_client).to_dict()
        assert data["ok"] is True
        assert data["request"] == {
            "language": "JavaScript",
            "database": "MongoDB",
            "description": "manage users",
        }
        assert data["block_count"] == 2
        assert data["written"] == ["index.js", "models/user.js"]


class TestRunGenerateFailures:
    def test_unreachable_on_first_call(self, workspace: Path, users_request: GenerationRequest):
        """Connection refused on stage 1 → no stage 2, no files."""
        client = MockModelClient()
        client.set_failure("llama3.1:8b", EndpointUnreachable("Failed to connect to Ollama"))
        client.set_response("codellama:13b", "```file: a.txt\nx\n```")

        with pytest.raises(EndpointUnreachable):
            run_generate(users_request, workspace, client)

        assert client.call_count == 1
        assert list(workspace.iterdir()) == []

    def test_error_status_on_second_call(self, workspace: Path, users_request: GenerationRequest):
        client = MockModelClient(responses={"llama3.1:8b": "plan"})
        client.set_failure("codellama:13b", EndpointError("codellama:13b", 500, "Internal Server Error"))

        with pytest.raises(EndpointError):
            run_generate(users_request, workspace, client)
        assert client.call_count == 2
        assert list(workspace.iterdir()) == []

    def test_malformed_reply(self, workspace: Path, users_request: GenerationRequest):
        client = MockModelClient()
        client.set_failure("llama3.1:8b", MalformedResponse("no 'response' text"))
        with pytest.raises(MalformedResponse):
            run_generate(users_request, workspace, client)

    def test_raw_dir_is_a_file(self, tmp_path: Path, workspace: Path,
                               users_request: GenerationRequest, mock_client: MockModelClient):
        raw_dir = tmp_path / "raw"
        raw_dir.write_text("in the way")
        with pytest.raises(WriteError, match="Cannot save raw reply"):
            run_generate(users_request, workspace, mock_client, raw_dir=raw_dir)
        assert mock_client.call_count == 1
        assert list(workspace.iterdir()) == []

    def test_unsafe_path_keeps_earlier_files(self, workspace: Path,
                                             users_request: GenerationRequest):
        client = MockModelClient(responses={
            "llama3.1:8b": "plan",
            "codellama:13b": "```file: ok.txt\nok\n```\n```file: ../../etc/passwd\nroot\n```",
        })
        with pytest.raises(UnsafePath) as exc:
            run_generate(users_request, workspace, client)
        assert exc.value.result.written == ["ok.txt"]
        assert (workspace / "ok.txt").read_text() == "ok"


class TestWriteResponse:
    def test_parses_and_writes(self, workspace: Path, code_reply: str):
        blocks, result = write_response(code_reply, workspace)
        assert len(blocks) == 2
        assert result.written == ["index.js", "models/user.js"]
