"""Tests for adonice.config (ConfigStore, require_settings, load_config)."""

from pathlib import Path

import pytest

from adonice.config import (
    CONFIG_KEYS,
    AppConfig,
    ConfigStore,
    MissingConfigError,
    load_config,
    require_settings,
)


@pytest.fixture
def env_file(tmp_path: Path) -> Path:
    return tmp_path / ".env"


class TestConfigStore:
    """ConfigStore: get/set persisted settings in .env, env precedence."""

    def test_config_keys_are_the_four_settings(self) -> None:
        """CONFIG_KEYS lists API key, PAT, org URL and target branch."""
        assert list(CONFIG_KEYS) == ["OPENAI_API_KEY", "AZURE_PAT", "ORG_URL", "TARGET_BRANCH"]

    def test_get_unset_returns_none(self, env_file: Path) -> None:
        """Missing file and no env var means None."""
        store = ConfigStore(env_file, environ={})
        assert store.get("OPENAI_API_KEY") is None

    def test_set_persists_to_file(self, env_file: Path) -> None:
        """set() writes KEY=value to the .env file and get() reads it back."""
        store = ConfigStore(env_file, environ={})
        store.set("ORG_URL", "https://dev.azure.com/orgname")
        assert env_file.is_file()
        assert "ORG_URL=https://dev.azure.com/orgname" in env_file.read_text(encoding="utf-8")
        assert ConfigStore(env_file, environ={}).get("ORG_URL") == "https://dev.azure.com/orgname"

    def test_set_updates_existing_key_and_keeps_others(self, env_file: Path) -> None:
        """Setting a key twice keeps one entry and leaves other keys intact."""
        store = ConfigStore(env_file, environ={})
        store.set("AZURE_PAT", "first")
        store.set("TARGET_BRANCH", "main")
        store.set("AZURE_PAT", "second")
        content = env_file.read_text(encoding="utf-8")
        assert content.count("AZURE_PAT=") == 1
        assert store.get("AZURE_PAT") == "second"
        assert store.get("TARGET_BRANCH") == "main"

    def test_environment_wins_over_file(self, env_file: Path) -> None:
        """An exported variable is not overridden by the .env file."""
        env_file.write_text("OPENAI_API_KEY=from-file\n", encoding="utf-8")
        store = ConfigStore(env_file, environ={"OPENAI_API_KEY": "from-env"})
        assert store.get("OPENAI_API_KEY") == "from-env"

    def test_secret_file_is_read(self, env_file: Path, tmp_path: Path) -> None:
        """{KEY}_FILE points at a file holding the value."""
        secret = tmp_path / "pat.txt"
        secret.write_text("secret-pat\n", encoding="utf-8")
        store = ConfigStore(env_file, environ={"AZURE_PAT_FILE": str(secret)})
        assert store.get("AZURE_PAT") == "secret-pat"

    def test_empty_value_is_unset(self, env_file: Path) -> None:
        """Blank values count as not set."""
        env_file.write_text("TARGET_BRANCH=\n", encoding="utf-8")
        assert ConfigStore(env_file, environ={}).get("TARGET_BRANCH") is None

    def test_lowercase_key_accepted(self, env_file: Path) -> None:
        """Keys are case-insensitive (CLI uses lower-case names)."""
        store = ConfigStore(env_file, environ={"TARGET_BRANCH": "main"})
        assert store.get("target_branch") == "main"

    def test_unknown_key_raises(self, env_file: Path) -> None:
        """Keys outside CONFIG_KEYS are rejected."""
        store = ConfigStore(env_file, environ={})
        with pytest.raises(KeyError):
            store.get("GITHUB_TOKEN")
        with pytest.raises(KeyError):
            store.set("GITHUB_TOKEN", "x")


class TestRequireSettings:
    """require_settings: all required keys or MissingConfigError."""

    def test_all_set(self, env_file: Path) -> None:
        """Returns RunSettings; trailing slash on org URL is dropped."""
        store = ConfigStore(
            env_file,
            environ={
                "OPENAI_API_KEY": "sk-test",
                "AZURE_PAT": "pat",
                "ORG_URL": "https://dev.azure.com/orgname/",
            },
        )
        settings = require_settings(store)
        assert settings.api_key == "sk-test"
        assert settings.pat == "pat"
        assert settings.org_url == "https://dev.azure.com/orgname"
        assert settings.target_branch is None

    def test_missing_keys_are_all_named(self, env_file: Path) -> None:
        """Every missing required key is listed, in declaration order."""
        store = ConfigStore(env_file, environ={"AZURE_PAT": "pat"})
        with pytest.raises(MissingConfigError) as exc_info:
            require_settings(store)
        assert exc_info.value.missing == ["OPENAI_API_KEY", "ORG_URL"]
        assert "OPENAI_API_KEY, ORG_URL" in str(exc_info.value)

    def test_target_branch_is_optional(self, env_file: Path) -> None:
        """TARGET_BRANCH is passed through when set but never required."""
        store = ConfigStore(
            env_file,
            environ={
                "OPENAI_API_KEY": "k",
                "AZURE_PAT": "p",
                "ORG_URL": "https://dev.azure.com/o",
                "TARGET_BRANCH": "release",
            },
        )
        assert require_settings(store).target_branch == "release"


class TestLoadConfig:
    """load_config: YAML + env, defaults when file is missing."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        """No YAML file yields AppConfig defaults."""
        config = load_config(tmp_path / "absent.yaml")
        assert isinstance(config, AppConfig)
        assert config.openai.model == "gpt-4o"
        assert config.openai.max_tokens == 300
        assert config.azure.api_version == "7.1-preview.1"
        assert config.azure.request_timeout is None
        assert config.azure.fallback_target_branch == "development"
        assert config.editor.command is None

    def test_yaml_values(self, tmp_path: Path) -> None:
        """Sections from YAML populate the nested models."""
        path = tmp_path / "adonice.yaml"
        path.write_text(
            "openai:\n  model: gpt-4o-mini\n  max_tokens: 500\n"
            "azure:\n  api_version: '7.0'\n  request_timeout: 15\n"
            "editor:\n  command: code --wait\n"
            "logging:\n  level: DEBUG\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.openai.model == "gpt-4o-mini"
        assert config.openai.max_tokens == 500
        assert config.azure.api_version == "7.0"
        assert config.azure.request_timeout == 15
        assert config.editor.command == "code --wait"
        assert config.logging.level == "DEBUG"

    def test_env_substitution(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """${VAR} values are replaced from the environment."""
        monkeypatch.setenv("MY_EDITOR", "vim")
        path = tmp_path / "adonice.yaml"
        path.write_text("editor:\n  command: ${MY_EDITOR}\n", encoding="utf-8")
        assert load_config(path).editor.command == "vim"

    def test_empty_file_returns_defaults(self, tmp_path: Path) -> None:
        """An empty YAML document is treated as no overrides."""
        path = tmp_path / "adonice.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path).openai.model == "gpt-4o"
