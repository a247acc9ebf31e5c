"""Node.js microservice scaffolder.

Asks six questions (name, description, srcDir, author, apiRoot, apiDir),
renders the Express service skeleton into a destination directory, and
remembers the answers in ``.yo-rc.json`` as defaults for the next run.

Quick usage::

    from src.config import GeneratorConfig
    from src.scaffolder import build_generator

    generator = build_generator(GeneratorConfig(destination=Path("./svc")))
    result = await generator.generate("./svc")
"""

from src.scaffolder.answers import STATIC_DEFAULTS, AnswerSet
from src.scaffolder.errors import (
    PromptAbandoned,
    ScaffoldError,
    StoreIOFailure,
    TemplateRenderFailure,
)
from src.scaffolder.generator import (
    ProjectGenerator,
    ScaffoldResult,
    ScaffoldStage,
    build_generator,
)
from src.scaffolder.prompts import QUESTIONS, PromptSequence, resolve_default
from src.scaffolder.store import AnswerStore, InMemoryAnswerStore, JsonAnswerStore
from src.scaffolder.templates import (
    TEMPLATE_MAPPING,
    ConflictPolicy,
    TemplateMapping,
    TemplateRenderer,
)

__all__ = [
    "AnswerSet",
    "AnswerStore",
    "ConflictPolicy",
    "InMemoryAnswerStore",
    "JsonAnswerStore",
    "ProjectGenerator",
    "PromptAbandoned",
    "PromptSequence",
    "QUESTIONS",
    "STATIC_DEFAULTS",
    "ScaffoldError",
    "ScaffoldResult",
    "ScaffoldStage",
    "StoreIOFailure",
    "TEMPLATE_MAPPING",
    "TemplateMapping",
    "TemplateRenderFailure",
    "TemplateRenderer",
    "build_generator",
    "resolve_default",
]
