"""Per-directory persistence of the last-used answers.

The on-disk layout matches Yeoman's ``.yo-rc.json``: one JSON object per
destination directory, with the generator's answers stored under its
namespace key.  Other namespaces in the same file are left untouched.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Protocol

from src.utils import load_json, save_json

from .answers import ANSWER_KEYS
from .errors import StoreIOFailure

DEFAULT_STORE_FILENAME = ".yo-rc.json"
DEFAULT_NAMESPACE = "generator-nodejs-microservice"


class AnswerStore(Protocol):
    """Directory-keyed answer persistence used by the orchestrator."""

    async def load(self, directory: str | Path) -> dict[str, str]:
        """Return the saved subset of answers for *directory* (may be empty)."""

    async def save(self, directory: str | Path, answers: dict[str, str]) -> None:
        """Overwrite the saved answers for *directory*."""


def _known_answers(record: dict[str, Any]) -> dict[str, str]:
    return {
        key: record[key]
        for key in ANSWER_KEYS
        if isinstance(record.get(key), str)
    }


# ---------------------------------------------------------------------------
# JSON file store
# ---------------------------------------------------------------------------


class JsonAnswerStore:
    """Stores answers in ``<directory>/<filename>`` under *namespace*."""

    def __init__(
        self,
        filename: str = DEFAULT_STORE_FILENAME,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        self.filename = filename
        self.namespace = namespace

    def path_for(self, directory: str | Path) -> Path:
        return Path(directory) / self.filename

    async def _read(self, directory: str | Path) -> dict[str, Any]:
        # A file whose top level is not an object holds no namespaces.
        path = self.path_for(directory)
        if not path.exists():
            return {}
        try:
            data = await asyncio.to_thread(load_json, path)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreIOFailure(directory, f"cannot read {path.name}: {exc}") from exc
        return data if isinstance(data, dict) else {}

    async def load(self, directory: str | Path) -> dict[str, str]:
        """Return the stored answers for *directory*.

        A missing file or namespace is the normal first-run state and yields
        ``{}``.  Only the six known keys with string values are returned.
        """
        data = await self._read(directory)
        record = data.get(self.namespace)
        if record is None:
            return {}
        if not isinstance(record, dict):
            raise StoreIOFailure(
                directory, f"malformed '{self.namespace}' entry in {self.filename}"
            )
        return _known_answers(record)

    async def save(self, directory: str | Path, answers: dict[str, str]) -> None:
        """Replace the namespace record with *answers*, keeping other namespaces."""
        data = await self._read(directory)
        data[self.namespace] = {key: answers[key] for key in ANSWER_KEYS}
        try:
            await save_json(data, self.path_for(directory))
        except OSError as exc:
            raise StoreIOFailure(
                directory, f"cannot write {self.filename}: {exc}"
            ) from exc


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------


class InMemoryAnswerStore:
    """Dict-backed store, keyed by resolved directory path.

    Every ``save`` call is also appended to :attr:`saves` so callers can
    assert on what was persisted and when.
    """

    def __init__(self, initial: dict[str | Path, dict[str, str]] | None = None) -> None:
        self._records: dict[Path, dict[str, str]] = {}
        self.saves: list[tuple[Path, dict[str, str]]] = []
        for directory, record in (initial or {}).items():
            self._records[self._key(directory)] = dict(record)

    @staticmethod
    def _key(directory: str | Path) -> Path:
        return Path(directory).resolve()

    async def load(self, directory: str | Path) -> dict[str, str]:
        return _known_answers(self._records.get(self._key(directory), {}))

    async def save(self, directory: str | Path, answers: dict[str, str]) -> None:
        record = {key: answers[key] for key in ANSWER_KEYS}
        self._records[self._key(directory)] = record
        self.saves.append((self._key(directory), dict(record)))
