import pytest

from agentstamp.checkpoint import ToolVersion
from agentstamp.config import AgentstampSettings, ConfigError, load_settings, resolve_config_path


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.delenv("AGENTSTAMP_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


def test_defaults():
    settings = AgentstampSettings()
    assert settings.tool_binary == "git-ai"
    assert settings.min_tool_version == ToolVersion(1, 0, 23)
    assert settings.probe_timeout_s == 5.0
    assert settings.checkpoint_timeout_s == 30.0
    assert settings.max_stack_frames == 50


def test_missing_file_returns_defaults(tmp_path):
    settings = load_settings(tmp_path / "absent.yml", dotenv_path=tmp_path / ".env")
    assert settings == AgentstampSettings()


def test_loads_yaml_values(tmp_path):
    path = tmp_path / "agentstamp.yml"
    path.write_text(
        "tool_binary: /usr/local/bin/git-ai\nmin_version: 1.2.0\nprobe_timeout_s: 2\nmax_stack_frames: 20\n",
        encoding="utf-8",
    )
    settings = load_settings(path, dotenv_path=tmp_path / ".env")
    assert settings.tool_binary == "/usr/local/bin/git-ai"
    assert settings.min_tool_version == ToolVersion(1, 2, 0)
    assert settings.probe_timeout_s == 2.0
    assert settings.max_stack_frames == 20


def test_expands_env_vars(tmp_path, monkeypatch):
    monkeypatch.setenv("GIT_AI_HOME", "/opt/git-ai")
    path = tmp_path / "agentstamp.yml"
    path.write_text("tool_binary: ${GIT_AI_HOME}/bin/git-ai\n", encoding="utf-8")
    assert load_settings(path, dotenv_path=tmp_path / ".env").tool_binary == "/opt/git-ai/bin/git-ai"


def test_dotenv_values_feed_expansion(tmp_path, monkeypatch):
    # setenv first so teardown removes the value load_dotenv writes
    monkeypatch.setenv("AGENTSTAMP_TEST_BIN", "placeholder")
    monkeypatch.delenv("AGENTSTAMP_TEST_BIN")
    dotenv = tmp_path / ".env"
    dotenv.write_text("AGENTSTAMP_TEST_BIN=/from/dotenv/git-ai\n", encoding="utf-8")
    path = tmp_path / "agentstamp.yml"
    path.write_text("tool_binary: ${AGENTSTAMP_TEST_BIN}\n", encoding="utf-8")
    assert load_settings(path, dotenv_path=dotenv).tool_binary == "/from/dotenv/git-ai"


def test_env_var_selects_config_path(tmp_path, monkeypatch):
    path = tmp_path / "custom.yml"
    path.write_text("checkpoint_timeout_s: 12\n", encoding="utf-8")
    monkeypatch.setenv("AGENTSTAMP_CONFIG", str(path))
    assert resolve_config_path() == path
    assert load_settings(dotenv_path=tmp_path / ".env").checkpoint_timeout_s == 12.0


def test_default_path_under_home(tmp_path):
    assert resolve_config_path() == tmp_path / "home" / ".agentstamp" / "agentstamp.yml"


def test_empty_file_returns_defaults(tmp_path):
    path = tmp_path / "agentstamp.yml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path, dotenv_path=tmp_path / ".env") == AgentstampSettings()


def test_malformed_yaml_raises_config_error(tmp_path):
    path = tmp_path / "agentstamp.yml"
    path.write_text("tool_binary: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Malformed YAML"):
        load_settings(path, dotenv_path=tmp_path / ".env")


def test_non_mapping_root_raises_config_error(tmp_path):
    path = tmp_path / "agentstamp.yml"
    path.write_text("- git-ai\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_settings(path, dotenv_path=tmp_path / ".env")


@pytest.mark.parametrize(
    "body",
    [
        "min_version: '1.0'\n",
        "probe_timeout_s: 0\n",
        "checkpoint_timeout_s: -1\n",
        "max_stack_frames: 0\n",
        "tool_binary: '  '\n",
    ],
)
def test_invalid_values_raise_config_error(tmp_path, body):
    path = tmp_path / "agentstamp.yml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid config"):
        load_settings(path, dotenv_path=tmp_path / ".env")


def test_unknown_keys_are_kept_as_extras(tmp_path):
    path = tmp_path / "agentstamp.yml"
    path.write_text("colour: blue\n", encoding="utf-8")
    settings = load_settings(path, dotenv_path=tmp_path / ".env")
    assert settings.model_extra == {"colour": "blue"}
