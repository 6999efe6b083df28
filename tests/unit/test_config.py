# tests/unit/test_config.py
import pytest
from pydantic import ValidationError
from mcp_code_review.config import Settings


pytestmark = pytest.mark.usefixtures("isolated_settings")


def test_settings_loads_from_env(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test-key")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai-key")

    settings = Settings()

    assert settings.anthropic_api_key == "sk-ant-test-key"
    assert settings.openai_api_key == "sk-openai-key"
    assert settings.google_api_key is None


def test_settings_defaults(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "AIzaSyTestKey")

    settings = Settings()

    assert settings.default_provider == "anthropic"
    assert settings.log_level == "info"
    assert settings.review_timeout is None
    assert settings.max_diff_size == 10000
    assert settings.max_retries == 1
    assert settings.retry_delay == 1.0
    assert settings.anthropic_timeout == 90.0


def test_settings_require_an_api_key():
    with pytest.raises(ValidationError, match="at least one provider API key"):
        Settings()


def test_settings_prefixed_env_vars(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai-key")
    monkeypatch.setenv("MCP_PR_DEFAULT_PROVIDER", "openai")
    monkeypatch.setenv("MCP_PR_MAX_DIFF_SIZE", "2048")
    monkeypatch.setenv("MCP_PR_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("MCP_PR_MAX_RETRIES", "3")
    monkeypatch.setenv("MCP_PR_RETRY_DELAY", "0.25")

    settings = Settings()

    assert settings.default_provider == "openai"
    assert settings.max_diff_size == 2048
    assert settings.log_level == "debug"
    assert settings.max_retries == 3
    assert settings.retry_delay == 0.25


def test_settings_legacy_env_vars(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai-key")
    monkeypatch.setenv("MCP_MAX_DIFF_SIZE", "500")
    monkeypatch.setenv("MCP_DEFAULT_PROVIDER", "google")

    settings = Settings()

    assert settings.max_diff_size == 500
    assert settings.default_provider == "google"


def test_prefixed_env_var_wins_over_legacy(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai-key")
    monkeypatch.setenv("MCP_MAX_DIFF_SIZE", "500")
    monkeypatch.setenv("MCP_PR_MAX_DIFF_SIZE", "700")

    assert Settings().max_diff_size == 700


@pytest.mark.parametrize(
    "value, expected",
    [("45", 45.0), ("90s", 90.0), ("2m", 120.0), ("1500ms", 1.5), ("1h", 3600.0)],
)
def test_review_timeout_durations(monkeypatch, value, expected):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai-key")
    monkeypatch.setenv("MCP_PR_REVIEW_TIMEOUT", value)

    assert Settings().review_timeout == expected


def test_invalid_duration_rejected(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai-key")
    monkeypatch.setenv("MCP_PR_REVIEW_TIMEOUT", "soon")

    with pytest.raises(ValidationError, match="invalid duration"):
        Settings()


def test_negative_retries_rejected(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai-key")
    monkeypatch.setenv("MCP_PR_MAX_RETRIES", "-1")

    with pytest.raises(ValidationError):
        Settings()


def test_settings_from_yaml_file(tmp_path):
    (tmp_path / "mcp-review.yaml").write_text(
        "openai_api_key: sk-yaml-key\n"
        "default_provider: openai\n"
        "max_diff_size: 4096\n"
    )

    settings = Settings()

    assert settings.openai_api_key == "sk-yaml-key"
    assert settings.default_provider == "openai"
    assert settings.max_diff_size == 4096


def test_env_overrides_yaml_file(monkeypatch, tmp_path):
    (tmp_path / "mcp-review.yaml").write_text("openai_api_key: sk-yaml-key\nmax_diff_size: 4096\n")
    monkeypatch.setenv("MCP_PR_MAX_DIFF_SIZE", "100")

    assert Settings().max_diff_size == 100


def test_settings_from_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("GOOGLE_API_KEY=AIzaDotenvKey\nMCP_PR_DEFAULT_PROVIDER=google\n")

    settings = Settings()

    assert settings.google_api_key == "AIzaDotenvKey"
    assert settings.default_provider == "google"


def test_api_key_lookup(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test-key")

    settings = Settings()

    assert settings.api_key_for("anthropic") == "sk-ant-test-key"
    assert settings.api_key_for("unknown") is None
    assert settings.has_provider("anthropic")
    assert not settings.has_provider("openai")
