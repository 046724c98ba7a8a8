"""Settings for the CI action runner, read from the environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

DEFAULT_API_URL = "https://api.github.com"


class ConfigurationError(ValueError):
    """Missing or invalid action input."""


class ActionSettings(BaseModel):
    """Inputs of a CI comparison run."""
    base_ref: str
    schema_path: str
    repository: str  # "owner/repo"
    token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    output_file: Optional[Path] = None
    workspace: Path = Path(".")

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("base_ref", "schema_path")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        owner, sep, repo = v.partition("/")
        if not sep or not owner or not repo or "/" in repo:
            raise ValueError(f"Repository '{v}' must look like 'owner/repo'")
        return v

    @property
    def local_schema_path(self) -> Path:
        return self.workspace / self.schema_path

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Optional[str],
    ) -> "ActionSettings":
        """
        Build settings from action inputs and GitHub runner variables.

        Explicit ``overrides`` (e.g. CLI flags) win over the environment;
        ``None`` overrides are ignored. ``INPUT_TOKEN`` falls back to
        ``GITHUB_TOKEN``.

        Raises:
            ConfigurationError: a required input is missing or invalid
        """
        env = os.environ if environ is None else environ
        values = {
            "base_ref": env.get("INPUT_BASE_REF"),
            "schema_path": env.get("INPUT_SCHEMA"),
            "repository": env.get("GITHUB_REPOSITORY"),
            "token": env.get("INPUT_TOKEN") or env.get("GITHUB_TOKEN"),
            "api_url": env.get("GITHUB_API_URL") or DEFAULT_API_URL,
            "output_file": env.get("GITHUB_OUTPUT") or None,
            "workspace": env.get("GITHUB_WORKSPACE") or ".",
        }
        values.update({key: value for key, value in overrides.items() if value is not None})

        missing = [
            name for name in ("base_ref", "schema_path", "repository")
            if not values.get(name)
        ]
        if missing:
            raise ConfigurationError(f"Input required and not supplied: {', '.join(missing)}")

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid action settings: {e}") from e
