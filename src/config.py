"""Microservice generator configuration.

Typed configuration for a scaffolding run. Settings use a Pydantic v2 model
so they are validated at construction time and can be read from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from src.scaffolder.store import DEFAULT_NAMESPACE, DEFAULT_STORE_FILENAME
from src.scaffolder.templates import ConflictPolicy

_TRUTHY = {"1", "true", "yes", "on"}


class GeneratorConfig(BaseModel):
    """Settings for one generator invocation.

    Instances are typically created once by the CLI entry point and passed
    to :func:`src.scaffolder.build_generator`.
    """

    destination: Path = Field(default=Path("."))
    template_dir: Path | None = Field(
        default=None, description="Template root; None uses the packaged templates"
    )
    store_filename: str = Field(default=DEFAULT_STORE_FILENAME, min_length=1)
    store_namespace: str = Field(default=DEFAULT_NAMESPACE, min_length=1)
    conflict: ConflictPolicy = Field(default=ConflictPolicy.OVERWRITE)
    accept_defaults: bool = Field(
        default=False, description="Skip prompting and accept every default"
    )
    announce: bool = Field(default=True, description="Print banner and per-file actions")

    @classmethod
    def from_env(cls, **overrides: Any) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            NMS_DESTINATION, NMS_TEMPLATE_DIR, NMS_STORE_FILENAME,
            NMS_CONFLICT, NMS_ACCEPT_DEFAULTS.

        Keyword *overrides* that are not ``None`` win over the environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("NMS_DESTINATION"):
            kwargs["destination"] = Path(os.environ["NMS_DESTINATION"])
        if os.environ.get("NMS_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["NMS_TEMPLATE_DIR"])
        if os.environ.get("NMS_STORE_FILENAME"):
            kwargs["store_filename"] = os.environ["NMS_STORE_FILENAME"]
        if os.environ.get("NMS_CONFLICT"):
            kwargs["conflict"] = os.environ["NMS_CONFLICT"].strip().lower()
        if os.environ.get("NMS_ACCEPT_DEFAULTS"):
            kwargs["accept_defaults"] = (
                os.environ["NMS_ACCEPT_DEFAULTS"].strip().lower() in _TRUTHY
            )

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
