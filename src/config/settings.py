# src/config/settings.py — v1
"""Typed configuration loaded from the environment and .env via pydantic-settings.

Every variable is prefixed with BUILDCORE_ (e.g. BUILDCORE_BUILD_DIR).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from buildcore.netlify_config.models import ConfigPaths
from buildcore.storage import layout


class ConfigurationError(Exception):
    """Raised when configuration is invalid or internally inconsistent."""


class Settings(BaseSettings):
    """Build settings."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Build layout ===
    build_dir: Path = Path(".")
    config_path: Path | None = None
    publish_dir: Path | None = None
    headers_file: Path | None = None
    redirects_file: Path | None = None
    node_path: str | None = None

    # === Deploy context ===
    context: str = "production"
    branch: str = "main"

    # === Plugins ===
    plugins: list[str] = Field(default_factory=list)  # dotted class paths, JSON list in env

    # === Storage ===
    storage_backend: Literal["local"] = "local"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("context", "branch")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("context and branch must not be blank")
        return v.strip()

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        errors: list[str] = []

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if self.publish_dir is not None and self.publish_dir.is_absolute():
            try:
                self.publish_dir.relative_to(self.build_dir.resolve())
            except ValueError:
                errors.append("PUBLISH_DIR must be inside BUILD_DIR")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    def resolve(self, path: Path | None) -> Path | None:
        """Resolve ``path`` against build_dir; None stays None."""
        if path is None:
            return None
        return path if path.is_absolute() else self.build_dir / path

    def config_paths(self) -> ConfigPaths:
        """Paths of the configuration file and its side files for this build."""
        defaults = ConfigPaths.for_publish_dir(
            self.build_dir, self.publish_dir, self.context, self.branch
        )
        return defaults.model_copy(
            update={
                "config_path": self.resolve(self.config_path) or defaults.config_path,
                "headers_path": self.resolve(self.headers_file) or defaults.headers_path,
                "redirects_path": self.resolve(self.redirects_file) or defaults.redirects_path,
            }
        )

    @property
    def backup_dir(self) -> Path:
        return layout.backup_dir(self.build_dir)


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid or inconsistent.
    """
    try:
        return Settings(**overrides)  # type: ignore[arg-type]
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
