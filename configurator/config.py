"""Configurator settings.

Typed settings for the CLI and the npm registry client.  Pydantic v2 models
validate at construction time and round-trip through JSON.  The composition
core never reads them: everything it needs is passed in explicitly.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Runtime settings for a configurator run."""

    registry_url: str = Field(default="https://registry.npmjs.org")
    registry_timeout: float = Field(
        default=30.0, ge=1, description="Per-request registry timeout in seconds"
    )
    max_concurrent_lookups: int = Field(
        default=8, ge=1, description="Maximum version lookups in flight at once"
    )
    project_name: str = Field(default="empty-project")
    output_dir: Path = Field(default=Path("./output"))

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Settings":
        """Load previously-saved settings from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            CONFIGURATOR_REGISTRY_URL, CONFIGURATOR_REGISTRY_TIMEOUT,
            CONFIGURATOR_MAX_CONCURRENT_LOOKUPS, CONFIGURATOR_PROJECT_NAME,
            CONFIGURATOR_OUTPUT_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CONFIGURATOR_REGISTRY_URL"):
            kwargs["registry_url"] = os.environ["CONFIGURATOR_REGISTRY_URL"]
        if os.environ.get("CONFIGURATOR_REGISTRY_TIMEOUT"):
            kwargs["registry_timeout"] = float(os.environ["CONFIGURATOR_REGISTRY_TIMEOUT"])
        if os.environ.get("CONFIGURATOR_MAX_CONCURRENT_LOOKUPS"):
            kwargs["max_concurrent_lookups"] = int(
                os.environ["CONFIGURATOR_MAX_CONCURRENT_LOOKUPS"]
            )
        if os.environ.get("CONFIGURATOR_PROJECT_NAME"):
            kwargs["project_name"] = os.environ["CONFIGURATOR_PROJECT_NAME"]
        if os.environ.get("CONFIGURATOR_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["CONFIGURATOR_OUTPUT_DIR"])
        return cls(**kwargs)
