"""Exceptions raised by the scaffolding stages.

Every failure is fatal to the run: the orchestrator moves to ``FAILED`` and
re-raises the exception unchanged, so callers see exactly one of these types
(with the original cause chained on ``__cause__``).
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for scaffolding failures, tagged with the failing stage."""

    stage: str = "scaffold"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"{self.stage}: {message}")


class StoreIOFailure(ScaffoldError):
    """The answer store could not read or write its backing file."""

    stage = "store"

    def __init__(self, directory: str | Path, message: str) -> None:
        self.directory = Path(directory)
        super().__init__(f"{message} ({self.directory})")


class PromptAbandoned(ScaffoldError):
    """The interactive input closed before every question was answered."""

    stage = "prompt"

    def __init__(self, key: str, answered: int) -> None:
        self.key = key
        self.answered = answered
        super().__init__(
            f"input closed while asking for '{key}' "
            f"after {answered} answer(s)"
        )


class TemplateRenderFailure(ScaffoldError):
    """A template could not be read/rendered, or its destination not written."""

    stage = "render"

    def __init__(self, template: str, destination: str | Path, message: str) -> None:
        self.template = template
        self.destination = Path(destination)
        super().__init__(f"{template} -> {self.destination}: {message}")
