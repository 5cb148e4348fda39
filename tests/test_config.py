import pytest

from openrouter_chat.app import config as mod
from openrouter_chat.infrastructure.exceptions import ConfigurationError


def test_missing_api_key():
    with pytest.raises(ConfigurationError, match="API_KEY is not set"):
        mod.load_settings()


@pytest.mark.parametrize("value", ["", "   "])
def test_empty_api_key(monkeypatch, value):
    monkeypatch.setenv("API_KEY", value)
    with pytest.raises(ConfigurationError):
        mod.load_settings()


def test_defaults(monkeypatch):
    monkeypatch.setenv("API_KEY", "sk-test")
    settings = mod.load_settings()
    assert settings.api_key == "sk-test"
    assert settings.api_url == "https://openrouter.ai/api/v1/chat/completions"
    assert settings.model == "anthropic/claude-3-haiku"
    assert settings.system_prompt == "You are a helpful assistant"
    assert settings.render_width == 120
    assert settings.timeout is None


def test_api_key_hidden_from_repr(monkeypatch):
    monkeypatch.setenv("API_KEY", "sk-secret")
    assert "sk-secret" not in repr(mod.load_settings())


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("API_KEY", "sk-test")
    monkeypatch.setenv("OPENROUTER_MODEL", "openai/gpt-4o")
    monkeypatch.setenv("OPENROUTER_SYSTEM_PROMPT", "Be brief")
    monkeypatch.setenv("OPENROUTER_RENDER_WIDTH", "80")
    monkeypatch.setenv("OPENROUTER_APP_TITLE", "my-app")
    settings = mod.load_settings()
    assert settings.model == "openai/gpt-4o"
    assert settings.system_prompt == "Be brief"
    assert settings.render_width == 80
    assert settings.app_title == "my-app"
    assert settings.app_url is None


@pytest.mark.parametrize("value", ["wide", "0", "-5"])
def test_invalid_render_width(monkeypatch, value):
    monkeypatch.setenv("API_KEY", "sk-test")
    monkeypatch.setenv("OPENROUTER_RENDER_WIDTH", value)
    with pytest.raises(ConfigurationError):
        mod.load_settings()


def test_loads_dotenv_from_cwd(tmp_path):
    (tmp_path / ".env").write_text("API_KEY=from-file\nOPENROUTER_MODEL=meta/llama\n")
    settings = mod.load_settings()
    assert settings.api_key == "from-file"
    assert settings.model == "meta/llama"


def test_environment_wins_over_dotenv(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("API_KEY=from-file\n")
    monkeypatch.setenv("API_KEY", "from-env")
    assert mod.load_settings().api_key == "from-env"


def test_explicit_env_file(tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("API_KEY=custom\n")
    assert mod.load_settings(env_file).api_key == "custom"


def test_missing_env_file_is_not_an_error(monkeypatch, tmp_path):
    monkeypatch.setenv("API_KEY", "sk-test")
    assert mod.load_settings(tmp_path / "nope.env").api_key == "sk-test"


@pytest.mark.parametrize(
    "name", ["API_KEY", "OPENROUTER_APP_URL", "OPENROUTER_APP_TITLE"]
)
def test_header_values_must_be_latin1(monkeypatch, name):
    monkeypatch.setenv("API_KEY", "sk-test")
    monkeypatch.setenv(name, "sk-“smart”")
    with pytest.raises(ConfigurationError, match=name):
        mod.load_settings()


def test_latin1_header_values_accepted(monkeypatch):
    monkeypatch.setenv("API_KEY", "sk-test")
    monkeypatch.setenv("OPENROUTER_APP_TITLE", "café")
    assert mod.load_settings().app_title == "café"


def test_undecodable_env_file(tmp_path):
    (tmp_path / ".env").write_bytes(b"API_KEY=\xff\xfe\n")
    with pytest.raises(ConfigurationError, match=".env"):
        mod.load_settings()
