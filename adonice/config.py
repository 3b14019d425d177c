"""Configuration loading from YAML, environment and the .env settings store.

The four user settings (API key, PAT, organization URL, default target
branch) live in a flat .env file managed by ConfigStore. Tool behaviour
(model, token budget, API version, editor, logging) comes from an optional
YAML file and environment. Never put real tokens in config files committed
to the repo.
"""

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import dotenv_values, set_key
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path(".adonice.yaml")
DEFAULT_ENV_FILE = Path(".env")

# Persisted user settings: key -> human label
CONFIG_KEYS: dict[str, str] = {
    "OPENAI_API_KEY": "OpenAI API Key",
    "AZURE_PAT": "Azure Personal Access Token",
    "ORG_URL": "Organization URL",
    "TARGET_BRANCH": "Default Target Branch",
}

REQUIRED_KEYS = ("OPENAI_API_KEY", "AZURE_PAT", "ORG_URL")


class MissingConfigError(Exception):
    """Raised when required settings are not set."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required config: {', '.join(missing)}")


class OpenAIConfig(BaseSettings):
    """Language model settings."""

    model_config = SettingsConfigDict(env_prefix="OPENAI_", extra="ignore")

    model: str = Field(default="gpt-4o", description="Chat completion model id")
    max_tokens: int = Field(default=300, ge=1, description="Output token budget for the draft")
    base_url: str | None = Field(default=None, description="Override API base URL (proxies, Azure OpenAI)")


class AzureDevOpsConfig(BaseSettings):
    """Azure DevOps REST API settings."""

    model_config = SettingsConfigDict(env_prefix="AZURE_", extra="ignore")

    api_version: str = Field(default="7.1-preview.1", description="api-version query parameter")
    # No timeout unless configured (env: AZURE_REQUEST_TIMEOUT)
    request_timeout: float | None = Field(default=None, gt=0, description="HTTP timeout in seconds")
    fallback_target_branch: str = Field(
        default="development",
        description="Target branch when neither config nor remote names one",
    )


class EditorConfig(BaseSettings):
    """External editor used to review the PR draft."""

    model_config = SettingsConfigDict(env_prefix="ADONICE_EDITOR_", extra="ignore")

    command: str | None = Field(default=None, description="Editor command; overrides $EDITOR")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="%(levelname)s - %(message)s", description="Log format")


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    azure: AzureDevOpsConfig = Field(default_factory=AzureDevOpsConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class RunSettings(BaseModel):
    """Resolved settings threaded through one pipeline run."""

    api_key: str
    pat: str
    org_url: str
    target_branch: str | None = None


class ConfigStore:
    """Get/set the persisted user settings.

    Values already present in the process environment win over the
    .env file, so the file never overrides an exported variable.
    """

    def __init__(
        self,
        path: Path | None = None,
        environ: Mapping[str, str] | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.path = Path(path) if path is not None else DEFAULT_ENV_FILE
        self._environ = environ if environ is not None else os.environ
        self._log = log or logging.getLogger("adonice.config")

    @staticmethod
    def _check_key(key: str) -> str:
        key = key.upper()
        if key not in CONFIG_KEYS:
            raise KeyError(f"Unknown config key: {key}")
        return key

    def _file_values(self) -> dict[str, str | None]:
        if not self.path.is_file():
            return {}
        return dict(dotenv_values(self.path))

    def _read_secret_file(self, key: str) -> str | None:
        """Read value from a file whose path is in {key}_FILE (Docker secrets)."""
        file_path = self._environ.get(f"{key}_FILE")
        if file_path:
            return Path(file_path).read_text(encoding="utf-8")
        return None

    def get(self, key: str) -> str | None:
        """Return the value for key or None when unset or empty.

        Lookup order: environment, {key}_FILE secret file, .env file.
        """
        key = self._check_key(key)
        value = self._environ.get(key)
        if not value:
            value = self._read_secret_file(key)
        if not value:
            value = self._file_values().get(key)
        if value is None or not value.strip():
            return None
        return value.strip()

    def set(self, key: str, value: str) -> None:
        """Persist key=value to the .env file (created if missing)."""
        key = self._check_key(key)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch(exist_ok=True)
        set_key(self.path, key, value, quote_mode="never")
        self._log.info("%s saved to %s", key, self.path)


def require_settings(store: ConfigStore) -> RunSettings:
    """Resolve settings for a run.

    Raises:
        MissingConfigError: If any of OPENAI_API_KEY, AZURE_PAT, ORG_URL is unset.
    """
    values = {key: store.get(key) for key in CONFIG_KEYS}
    missing = [key for key in REQUIRED_KEYS if not values[key]]
    if missing:
        raise MissingConfigError(missing)
    return RunSettings(
        api_key=values["OPENAI_API_KEY"],
        pat=values["AZURE_PAT"],
        org_url=values["ORG_URL"].rstrip("/"),
        target_branch=values["TARGET_BRANCH"],
    )


def _substitute_env(value: Any, env: Mapping[str, str]) -> Any:
    """Replace ${VAR} and $VAR in strings with values from env."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    A missing file yields defaults (still overridable from env).
    """
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    raw = _substitute_env(raw, dict(os.environ))

    return AppConfig(
        openai=OpenAIConfig(**(raw.get("openai") or {})),
        azure=AzureDevOpsConfig(**(raw.get("azure") or {})),
        editor=EditorConfig(**(raw.get("editor") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
