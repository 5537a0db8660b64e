"""
Tests for environment-driven settings and the console entry point.
"""

import pytest
from pydantic import ValidationError

from agentgraph.__main__ import _parse_args, main
from agentgraph.config import Settings, get_settings
from agentgraph.llm import LLMConfig

ENV_VARS = [
    "OPENAI_API_KEY", "OPENAI_BASE_URL", "AGENTGRAPH_MODEL", "AGENTGRAPH_TEMPERATURE",
    "AGENTGRAPH_TIMEOUT", "AGENTGRAPH_MAX_STEPS", "AGENTGRAPH_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings()
        assert settings.model == "gpt-4o-mini"
        assert settings.temperature == 0
        assert settings.openai_base_url == "https://api.openai.com/v1"
        assert settings.max_steps is None
        assert settings.log_level == "WARNING"

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("OPENAI_API_KEY", "sk-env")
        clean_env.setenv("AGENTGRAPH_MODEL", "gpt-4o")
        clean_env.setenv("AGENTGRAPH_MAX_STEPS", "12")
        clean_env.setenv("AGENTGRAPH_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.openai_api_key == "sk-env"
        assert settings.model == "gpt-4o"
        assert settings.max_steps == 12
        assert settings.log_level == "DEBUG"

    def test_blank_max_steps_means_unbounded(self, clean_env):
        clean_env.setenv("AGENTGRAPH_MAX_STEPS", " ")
        assert Settings().max_steps is None

    def test_invalid_values(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(max_steps=0)
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    @pytest.mark.parametrize("name, raw", [
        ("AGENTGRAPH_TEMPERATURE", "hot"),
        ("AGENTGRAPH_TIMEOUT", "soon"),
        ("AGENTGRAPH_MAX_STEPS", "many"),
        ("AGENTGRAPH_MAX_STEPS", "0"),
    ])
    def test_bad_environment_values_fail_validation(self, clean_env, name, raw):
        clean_env.setenv(name, raw)
        with pytest.raises(ValidationError):
            Settings()

    def test_numeric_environment_values_are_parsed(self, clean_env):
        clean_env.setenv("AGENTGRAPH_TEMPERATURE", "0.5")
        clean_env.setenv("AGENTGRAPH_TIMEOUT", "12")
        settings = Settings()
        assert settings.temperature == 0.5
        assert settings.timeout == 12.0

    def test_llm_config_from_settings(self, clean_env):
        settings = Settings(openai_api_key="sk-x", model="gpt-4o", timeout=5)
        config = LLMConfig.from_settings(settings)
        assert config.model == "gpt-4o"
        assert config.api_key == "sk-x"
        assert config.timeout == 5
        assert config.base_url == "https://api.openai.com/v1"


def test_cli_arguments():
    assert _parse_args([]).request == "Add 3 and 4."
    args = _parse_args(["Multiply 6 and 7.", "--max-steps", "9"])
    assert args.request == "Multiply 6 and 7."
    assert args.max_steps == 9


@pytest.mark.parametrize("raw", ["0", "-3", "ten"])
def test_cli_rejects_non_positive_max_steps(raw, capsys):
    with pytest.raises(SystemExit) as exc:
        _parse_args(["--max-steps", raw])
    assert exc.value.code == 2
    assert "--max-steps" in capsys.readouterr().err


def test_cli_reports_invalid_settings(clean_env, capsys):
    clean_env.setenv("AGENTGRAPH_TEMPERATURE", "hot")
    get_settings.cache_clear()
    try:
        assert main(["Add 3 and 4."]) == 1
    finally:
        get_settings.cache_clear()
    assert "invalid settings" in capsys.readouterr().err
