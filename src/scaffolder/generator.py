"""Main scaffolding orchestrator.

Sequences one scaffolding run against a destination directory::

    IDLE -> LOADING_DEFAULTS -> PROMPTING -> RENDERING -> PERSISTING -> DONE

Any stage failure moves the run to ``FAILED`` and the original exception is
re-raised unchanged.  There are no retries and no rollback: files rendered
before a failure stay on disk, and answers are only persisted after every
file was written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from src.utils import (
    print_banner,
    print_file_action,
    print_info,
    print_success,
    print_summary_table,
)

from .answers import AnswerSet
from .prompts import PromptSequence, accept_defaults, rich_ask
from .store import AnswerStore, JsonAnswerStore
from .templates import TemplateRenderer

if TYPE_CHECKING:  # pragma: no cover
    from src.config import GeneratorConfig


class ScaffoldStage(str, Enum):
    IDLE = "idle"
    LOADING_DEFAULTS = "loading_defaults"
    PROMPTING = "prompting"
    RENDERING = "rendering"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ScaffoldResult:
    """Outcome of a successful run."""

    directory: Path
    answers: AnswerSet
    written: list[Path] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Composes answer store, prompt sequence and renderer into one run.

    Attributes:
        stage: Current :class:`ScaffoldStage`.
        history: Every stage entered during the last run, in order.
    """

    def __init__(
        self,
        store: AnswerStore,
        prompts: PromptSequence,
        renderer: TemplateRenderer,
        *,
        announce: bool = False,
    ) -> None:
        self.store = store
        self.prompts = prompts
        self.renderer = renderer
        self.announce = announce
        self.stage = ScaffoldStage.IDLE
        self.history: list[ScaffoldStage] = [ScaffoldStage.IDLE]
        self.written: list[Path] = []

    def _enter(self, stage: ScaffoldStage) -> None:
        self.stage = stage
        self.history.append(stage)

    # -- Public API --------------------------------------------------------

    async def generate(self, directory: str | Path) -> ScaffoldResult:
        """Run every stage against *directory*.

        Args:
            directory: Destination root; rendered paths are relative to it
                and the answer store is keyed by it.

        Returns:
            A :class:`ScaffoldResult` with the answers and written files.

        Raises:
            ScaffoldError: Whatever the failing stage raised, unmodified.
        """
        root = Path(directory)
        self.stage = ScaffoldStage.IDLE
        self.history = [ScaffoldStage.IDLE]
        self.written = []

        if self.announce:
            print_banner(
                "Welcome to [red]nodejs-microservice[/red] generator!",
            )
            print_info("Generating Node.js Microservices")

        try:
            self._enter(ScaffoldStage.LOADING_DEFAULTS)
            stored = await self.store.load(root)

            self._enter(ScaffoldStage.PROMPTING)
            answers = await self.prompts.collect(stored)
            if self.announce:
                print_summary_table(answers.as_context(), title="Answers")

            self._enter(ScaffoldStage.RENDERING)
            self.written = await self.renderer.render_mappings(answers, root)

            self._enter(ScaffoldStage.PERSISTING)
            await self.store.save(root, answers.as_context())
        except BaseException:
            if self.stage is ScaffoldStage.RENDERING:
                self.written = list(self.renderer.written)
            self._enter(ScaffoldStage.FAILED)
            raise

        self._enter(ScaffoldStage.DONE)
        print_success(f"Application {answers.name} generated successfully!!!")
        return ScaffoldResult(directory=root, answers=answers, written=list(self.written))


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


def build_generator(config: "GeneratorConfig") -> ProjectGenerator:
    """Wire a :class:`ProjectGenerator` from a :class:`GeneratorConfig`."""
    store = JsonAnswerStore(
        filename=config.store_filename,
        namespace=config.store_namespace,
    )
    prompts = PromptSequence(ask=accept_defaults if config.accept_defaults else rich_ask)
    renderer = TemplateRenderer(
        config.template_dir,
        conflict=config.conflict,
        on_write=print_file_action if config.announce else None,
    )
    return ProjectGenerator(store, prompts, renderer, announce=config.announce)
