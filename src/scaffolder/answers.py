"""The answer set driving one scaffolding run.

Field names follow the Yeoman generator this tool replaces: the wire keys
(``srcDir``, ``apiRoot``, ``apiDir``) are what templates reference and what
the answer store persists, while Python code uses snake_case attributes.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Static defaults (used when the answer store has no value)
# ---------------------------------------------------------------------------

STATIC_DEFAULTS: dict[str, str] = {
    "name": "myservice",
    "description": "A nodejs microservices",
    "srcDir": "src",
    "author": "nobody",
    "apiRoot": "/api",
    "apiDir": "api",
}

ANSWER_KEYS: tuple[str, ...] = tuple(STATIC_DEFAULTS)


# ---------------------------------------------------------------------------
# AnswerSet
# ---------------------------------------------------------------------------


class AnswerSet(BaseModel):
    """Resolved configuration for one scaffolding run.

    Immutable once built; the same instance is handed to the renderer and
    then serialised back to the answer store.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = Field(default=STATIC_DEFAULTS["name"], min_length=1)
    description: str = Field(default=STATIC_DEFAULTS["description"])
    src_dir: str = Field(default=STATIC_DEFAULTS["srcDir"], alias="srcDir")
    api_root: str = Field(default=STATIC_DEFAULTS["apiRoot"], alias="apiRoot")
    api_dir: str = Field(default=STATIC_DEFAULTS["apiDir"], alias="apiDir")
    author: str = Field(default=STATIC_DEFAULTS["author"])

    def as_context(self) -> dict[str, str]:
        """Return the wire-keyed mapping used for templates and persistence."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "AnswerSet":
        """Build an ``AnswerSet`` from a (possibly partial) wire-keyed dict.

        Missing keys fall back to :data:`STATIC_DEFAULTS`; unknown keys are
        ignored.
        """
        return cls.model_validate({k: data[k] for k in ANSWER_KEYS if k in data})
