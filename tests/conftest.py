"""Shared pytest fixtures for the microservice generator test suite.

Provides reusable fixtures for:
- Default and customised answer sets
- In-memory template loaders and recording file writers
- Scripted prompt answer sources
- In-memory answer stores
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest
from jinja2 import DictLoader

from src.scaffolder.answers import STATIC_DEFAULTS, AnswerSet
from src.scaffolder.store import InMemoryAnswerStore
from src.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

@pytest.fixture
def default_answers() -> AnswerSet:
    """The answer set produced by accepting every static default."""
    return AnswerSet()


@pytest.fixture
def custom_answers() -> AnswerSet:
    """A fully customised answer set."""
    return AnswerSet(
        name="orders",
        description="Order service",
        srcDir="lib",
        apiRoot="/v1",
        apiDir="routes",
        author="Jane",
    )


# ---------------------------------------------------------------------------
# Templates & writers
# ---------------------------------------------------------------------------

SKELETON_TEMPLATES: dict[str, str] = {
    "api/index.js.j2": "// api for {{ name }} at {{ apiRoot }}\n",
    "api/about/controller.js": "exports.info = (req, res) => res.json({});\n",
    "express/index.js": "module.exports = (apiRoot, routes) => {};\n",
    "package.json.j2": '{"name": "{{ name }}", "author": "{{ author }}"}\n',
    "index.js.j2": "const router = require('./api');\n",
    "config.js.j2": "apiRoot: '{{ apiRoot }}'\n",
}


class RecordingWriter:
    """In-memory ``FileWriter`` that records writes and can inject faults."""

    def __init__(
        self,
        existing: Iterable[Path] = (),
        fail_on: Callable[[Path], bool] | None = None,
    ) -> None:
        self.files: dict[Path, str] = {Path(p): "" for p in existing}
        self.writes: list[Path] = []
        self.fail_on = fail_on

    def exists(self, path: Path) -> bool:
        return path in self.files

    def write_text(self, path: Path, content: str) -> None:
        if self.fail_on is not None and self.fail_on(path):
            raise OSError(28, "No space left on device")
        self.files[path] = content
        self.writes.append(path)


@pytest.fixture
def dict_loader() -> DictLoader:
    return DictLoader(dict(SKELETON_TEMPLATES))


@pytest.fixture
def recording_writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def writer_factory() -> type[RecordingWriter]:
    """The ``RecordingWriter`` class, for tests needing faults or pre-existing files."""
    return RecordingWriter


@pytest.fixture
def memory_renderer(dict_loader: DictLoader, recording_writer: RecordingWriter) -> TemplateRenderer:
    """Renderer backed by in-memory templates and a recording writer."""
    return TemplateRenderer(loader=dict_loader, writer=recording_writer)


# ---------------------------------------------------------------------------
# Prompt answer sources
# ---------------------------------------------------------------------------

class ScriptedAsk:
    """Ask function replaying scripted replies; ``EOFError`` once exhausted.

    Records every ``(message, default)`` pair it is asked.
    """

    def __init__(self, replies: Iterable[str | None] = (), *, close_after: int | None = None) -> None:
        self.replies = list(replies)
        self.close_after = close_after
        self.asked: list[tuple[str, str]] = []

    def __call__(self, message: str, default: str) -> str | None:
        if self.close_after is not None and len(self.asked) >= self.close_after:
            raise EOFError
        self.asked.append((message, default))
        if not self.replies:
            return ""
        return self.replies.pop(0)


@pytest.fixture
def scripted_ask() -> type[ScriptedAsk]:
    return ScriptedAsk


# ---------------------------------------------------------------------------
# Answer stores
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_store() -> InMemoryAnswerStore:
    return InMemoryAnswerStore()


@pytest.fixture
def static_defaults() -> dict[str, str]:
    return dict(STATIC_DEFAULTS)
