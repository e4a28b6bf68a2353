"""
Configuration Management.

Loads secrets from config/.env and settings from config/settings/*.yaml.
No hardcoded values in code; all configuration comes from these sources.

Secrets (.env):
    NOTESTORE_TOKEN

Settings (YAML):
    application.yaml   - App identity
    notestore.yaml     - Remote note store URL, timeout, search page size
    editor.yaml        - Editor command and cache directory
    storage.yaml       - Local SQLite store
    logging.yaml       - Logging configuration
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from notesync.core.config_schema import (
    ApplicationSchema,
    EditorSchema,
    LoggingSchema,
    NoteStoreSchema,
    StorageSchema,
)

DEFAULT_EDITOR = "vi"


def find_project_root() -> Path:
    """Find project root by looking for .project_root marker file."""
    current = Path.cwd()
    while current != current.parent:
        if (current / ".project_root").exists():
            return current
        current = current.parent
    raise RuntimeError("Project root not found. Ensure .project_root file exists.")


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    project_root = find_project_root()
    config_path = project_root / "config" / "settings" / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets loaded from config/.env. Only passwords, tokens, and keys."""

    notestore_token: str = ""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type, filename: str) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Application configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml")
        self._notestore = _load_validated(NoteStoreSchema, "notestore.yaml")
        self._editor = _load_validated(EditorSchema, "editor.yaml")
        self._storage = _load_validated(StorageSchema, "storage.yaml")
        self._logging = _load_validated(LoggingSchema, "logging.yaml")

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def notestore(self) -> NoteStoreSchema:
        """Remote note store settings."""
        return self._notestore

    @property
    def editor(self) -> EditorSchema:
        """Editor and cache document settings."""
        return self._editor

    @property
    def storage(self) -> StorageSchema:
        """Local store settings."""
        return self._storage

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def resolve_path(configured_path: str) -> Path:
    """Resolve a configured path; relative paths are anchored at the project root."""
    path = Path(configured_path).expanduser()
    if path.is_absolute():
        return path
    return find_project_root() / path


def get_storage_url() -> str:
    """
    Construct the SQLAlchemy URL for the local store from storage.yaml.

    Returns:
        SQLite connection URL string.
    """
    path = resolve_path(get_app_config().storage.path)
    return f"sqlite:///{path}"


def get_editor_command() -> str:
    """
    Get the editor command line.

    editor.yaml wins, then $VISUAL, then $EDITOR, then vi.
    """
    configured = get_app_config().editor.command
    if configured:
        return configured
    return os.environ.get("VISUAL") or os.environ.get("EDITOR") or DEFAULT_EDITOR
