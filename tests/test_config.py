"""
Tests for configuration loading — crudgen.yml parsing, env overrides.
"""

import textwrap
from pathlib import Path

import pytest

from crudgen.core.config.loader import ConfigError, Settings, find_config_file, load_settings
from crudgen.core.use_cases.config_check import check_config


@pytest.fixture
def valid_config(tmp_path: Path) -> Path:
    """Create a full crudgen.yml in a temp directory."""
    content = textwrap.dedent("""\
        endpoint: http://gpu-box:11434/api/generate
        interpret_model: llama3.1:70b
        generate_model: deepseek-coder:33b
        timeout: 120
        workspace: out
    """)
    path = tmp_path / "crudgen.yml"
    path.write_text(content)
    return path


class TestDefaults:
    def test_settings_defaults(self):
        s = Settings()
        assert s.endpoint == "http://localhost:11434/api/generate"
        assert s.interpret_model == "llama3.1:8b"
        assert s.generate_model == "codellama:13b"
        assert s.timeout is None
        assert s.workspace is None

    def test_no_file_gives_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        s = load_settings(environ={})
        assert s == Settings()
        assert s.config_path is None


class TestLoadSettings:
    def test_full_file(self, valid_config: Path):
        s = load_settings(valid_config, environ={})
        assert s.endpoint == "http://gpu-box:11434/api/generate"
        assert s.interpret_model == "llama3.1:70b"
        assert s.generate_model == "deepseek-coder:33b"
        assert s.timeout == 120
        assert s.config_path == valid_config.resolve()

    def test_relative_workspace_resolved_against_file(self, valid_config: Path):
        s = load_settings(valid_config, environ={})
        assert s.workspace == valid_config.resolve().parent / "out"

    def test_absolute_workspace_kept(self, tmp_path: Path):
        target = tmp_path / "abs"
        path = tmp_path / "crudgen.yml"
        path.write_text(f"workspace: {target}\n")
        assert load_settings(path, environ={}).workspace == target

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "crudgen.yml"
        path.write_text("")
        assert load_settings(path, environ={}).generate_model == "codellama:13b"

    def test_env_overrides_file(self, valid_config: Path):
        s = load_settings(valid_config, environ={
            "CRUDGEN_GENERATE_MODEL": "qwen2.5-coder",
            "CRUDGEN_TIMEOUT": "15",
        })
        assert s.generate_model == "qwen2.5-coder"
        assert s.timeout == 15
        assert s.interpret_model == "llama3.1:70b"

    def test_empty_env_value_ignored(self, valid_config: Path):
        s = load_settings(valid_config, environ={"CRUDGEN_ENDPOINT": ""})
        assert s.endpoint == "http://gpu-box:11434/api/generate"


class TestLoadSettingsErrors:
    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.yml", environ={})

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "crudgen.yml"
        path.write_text("endpoint: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path, environ={})

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "crudgen.yml"
        path.write_text("just a string\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_settings(path, environ={})

    def test_bad_timeout(self, tmp_path: Path):
        path = tmp_path / "crudgen.yml"
        path.write_text("timeout: 0\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_settings(path, environ={})

    def test_bad_env_timeout(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ConfigError, match="environment"):
            load_settings(environ={"CRUDGEN_TIMEOUT": "soon"})


class TestFindConfigFile:
    def test_found_in_cwd(self, valid_config: Path):
        assert find_config_file(valid_config.parent) == valid_config.resolve()

    def test_found_in_parent(self, valid_config: Path):
        sub = valid_config.parent / "a" / "b"
        sub.mkdir(parents=True)
        assert find_config_file(sub) == valid_config.resolve()

    def test_not_found(self, tmp_path: Path):
        empty = tmp_path / "empty"
        empty.mkdir()
        # may find one above tmp_path on a dev box, but never inside it
        found = find_config_file(empty)
        assert found is None or not found.is_relative_to(tmp_path)


class TestCheckConfig:
    def test_valid(self, valid_config: Path):
        (valid_config.parent / "out").mkdir()
        result = check_config(valid_config)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_missing_workspace_warns(self, valid_config: Path):
        result = check_config(valid_config)
        assert result.valid
        assert any("Workspace directory does not exist" in w for w in result.warnings)

    def test_same_model_warns(self, tmp_path: Path):
        path = tmp_path / "crudgen.yml"
        path.write_text("interpret_model: m\ngenerate_model: m\n")
        result = check_config(path)
        assert any("same model" in w for w in result.warnings)

    def test_bad_endpoint_scheme(self, tmp_path: Path):
        path = tmp_path / "crudgen.yml"
        path.write_text("endpoint: localhost:11434\n")
        result = check_config(path)
        assert not result.valid
        assert "http(s) URL" in result.errors[0]

    def test_to_dict(self, valid_config: Path):
        data = check_config(valid_config).to_dict()
        assert data["config_path"] == str(valid_config)
        assert data["settings"]["timeout"] == 120
