from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from core.exceptions import ConfigurationError

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


def _readable_file_from_env(env: str) -> str:
    value = os.getenv(env)
    if not value:
        raise ConfigurationError(
            f"Missing required environment variable: {env}",
            details={"env": env},
        )
    path = Path(value)
    if not path.is_file() or not os.access(path, os.R_OK):
        raise ConfigurationError(
            f"File named by {env} is missing or unreadable: {value}",
            details={"env": env, "path": value},
        )
    return value


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(8000, ge=1, le=65535)
    cert_file_env: str = "CERT_FILE"
    key_file_env: str = "KEY_FILE"
    graceful_shutdown_seconds: float = Field(5.0, ge=0.0)

    @property
    def cert_file(self) -> str:
        return _readable_file_from_env(self.cert_file_env)

    @property
    def key_file(self) -> str:
        return _readable_file_from_env(self.key_file_env)


class StorageSettings(BaseModel):
    backend: Literal["s3", "local"] = "s3"
    bucket: str = "bucket1"
    endpoint_url: str | None = "http://localhost:9000"
    region: str | None = None
    access_key_env: str = "MINIO_ACCESS_KEY"
    secret_key_env: str = "MINIO_SECRET_KEY"
    local_root: str = "data/objects"

    @field_validator("bucket")
    @classmethod
    def _bucket_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("bucket must not be empty")
        return value

    @property
    def access_key(self) -> str:
        return os.getenv(self.access_key_env, "minioadmin")

    @property
    def secret_key(self) -> str:
        return os.getenv(self.secret_key_env, "minioadmin")


class KeySettings(BaseModel):
    prefix: str = "xmlobject"


class HttpSettings(BaseModel):
    # Status for unknown paths; the original service answered 200
    not_found_status: int = Field(200, ge=100, le=599)


class Settings(BaseModel):
    server: ServerSettings = Field(default_factory=ServerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    keys: KeySettings = Field(default_factory=KeySettings)
    http: HttpSettings = Field(default_factory=HttpSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                XMLVAULT_CONFIG environment variable or defaults to config/default.yaml.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            ConfigurationError: If the file does not exist or its content is invalid.
        """
        config_path = path or Path(os.getenv("XMLVAULT_CONFIG", "config/default.yaml"))
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                details={"path": str(config_path)},
            )
        try:
            with config_path.open("r", encoding="utf-8") as fp:
                payload = yaml.safe_load(fp) or {}
            return cls(**payload)
        except Exception as exc:
            raise ConfigurationError(
                f"Invalid configuration: {exc}",
                details={"path": str(config_path)},
            ) from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "ServerSettings",
    "StorageSettings",
    "KeySettings",
    "HttpSettings",
    "get_settings",
]
