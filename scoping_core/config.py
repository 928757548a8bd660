"""
'scoping_core/config.py': Settings for the scoping API.
Handles environment variables, the YAML configuration file and CLI overrides.
"""

import os
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Optional

from config.loader import load_config


DEFAULT_COLLECTIONS = {
    "users": "users",
    "messages": "messages",
    "question_sets": "question_sets",
    "course_outlines": "course_outlines",
}


def _clean(value: Any) -> Optional[str]:
    """Treat empty strings and unexpanded ${VAR} references as unset."""
    if value is None:
        return None
    value = str(value).strip()
    if not value or value.startswith("${"):
        return None
    return value


@dataclass
class Settings:
    """Process-wide configuration, built once at startup."""

    project_id: str = ""
    log_level: str = "error"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    shutdown_timeout: int = 15

    # Datastore
    datastore: str = "firestore"
    credentials_path: Optional[str] = None
    collections: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLLECTIONS))

    # Completion provider
    completion_api_url: str = "https://api.openai.com/v1/chat/completions"
    completion_api_key: Optional[str] = None
    completion_secret_name: str = "OpenAIAPIKey"
    completion_model_id: str = "gpt-4"
    completion_temperature: float = 1.0
    completion_timeout: float = 300.0

    # Completion worker
    completion_workers: int = 2
    retry_attempts: int = 3
    retry_wait_min: float = 1.0
    retry_wait_max: float = 10.0

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "Settings":
        """Create settings from the nested YAML configuration structure."""
        server = config_dict.get("server", {}) or {}
        database = config_dict.get("database", {}) or {}
        completion = config_dict.get("completion", {}) or {}

        collections = dict(DEFAULT_COLLECTIONS)
        collections.update(database.get("collections", {}) or {})

        return cls(
            project_id=_clean(database.get("project_id")) or "",
            host=server.get("host", cls.host),
            port=int(server.get("port", cls.port)),
            shutdown_timeout=int(server.get("shutdown_timeout", cls.shutdown_timeout)),
            datastore=database.get("type", cls.datastore),
            credentials_path=_clean(database.get("credentials_path")),
            collections=collections,
            completion_api_url=completion.get("api_url", cls.completion_api_url),
            completion_api_key=_clean(completion.get("api_key")),
            completion_secret_name=completion.get("secret_name", cls.completion_secret_name),
            completion_model_id=completion.get("model_id", cls.completion_model_id),
            completion_temperature=float(completion.get("temperature", cls.completion_temperature)),
            completion_timeout=float(completion.get("timeout", cls.completion_timeout)),
            completion_workers=int(completion.get("workers", cls.completion_workers)),
            retry_attempts=int(completion.get("retry_attempts", cls.retry_attempts)),
            retry_wait_min=float(completion.get("retry_wait_min", cls.retry_wait_min)),
            retry_wait_max=float(completion.get("retry_wait_max", cls.retry_wait_max)),
        )

    @classmethod
    def from_env(cls, project_id: Optional[str] = None, config_path: str = "config.yaml") -> "Settings":
        """
        Create settings from the YAML file (when present) and the environment.

        Args:
            project_id (Optional[str]): Project identifier from the command line.
            config_path (str): Path to the YAML configuration file.

        Returns:
            Settings: The resolved settings.
        """
        settings = cls.from_dict(load_config(config_path)) if os.path.exists(config_path) else cls()

        if project_id:
            settings.project_id = project_id
        settings.log_level = os.getenv("LOG_LEVEL", settings.log_level)
        settings.completion_api_key = _clean(os.getenv("OPENAI_API_KEY")) or settings.completion_api_key
        settings.datastore = os.getenv("DATASTORE_BACKEND", settings.datastore)
        settings.credentials_path = _clean(os.getenv("GOOGLE_APPLICATION_CREDENTIALS_JSON")) or settings.credentials_path
        return settings

    def validate(self) -> None:
        """Validate settings that the application cannot start without."""
        if not self.project_id:
            raise ValueError("`project_id` is required.")
        if self.datastore not in ("firestore", "memory"):
            raise ValueError(f"Unsupported datastore backend: {self.datastore}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a dictionary with the API key masked."""
        data = asdict(self)
        if data.get("completion_api_key"):
            data["completion_api_key"] = "***"
        return data
