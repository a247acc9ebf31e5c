"""Ordered question definitions and answer collection.

Each :class:`Question` carries a message *function* of the answers collected
so far, plus the keys that function reads.  The sequence only asks a question
once its dependencies are answered, which pins the one real ordering edge in
the generator: the ``apiDir`` message embeds the chosen ``srcDir``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from rich.prompt import Prompt

from src.utils import console

from .answers import STATIC_DEFAULTS, AnswerSet
from .errors import PromptAbandoned

AskFunc = Callable[[str, str], str | None]


# ---------------------------------------------------------------------------
# Question definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Question:
    """One prompt: answer key, message builder, static default."""

    key: str
    message: Callable[[Mapping[str, str]], str]
    default: str
    depends_on: tuple[str, ...] = ()

    def render_message(self, answers: Mapping[str, str]) -> str:
        missing = [dep for dep in self.depends_on if dep not in answers]
        if missing:
            raise ValueError(
                f"question '{self.key}' asked before {', '.join(missing)}"
            )
        return self.message(answers)


def _fixed(text: str) -> Callable[[Mapping[str, str]], str]:
    return lambda _answers: text


QUESTIONS: tuple[Question, ...] = (
    Question(
        key="name",
        message=_fixed("What is the application name?"),
        default=STATIC_DEFAULTS["name"],
    ),
    Question(
        key="description",
        message=_fixed("What is the application description?"),
        default=STATIC_DEFAULTS["description"],
    ),
    Question(
        key="srcDir",
        message=_fixed("Where to put the source code?"),
        default=STATIC_DEFAULTS["srcDir"],
    ),
    Question(
        key="author",
        message=_fixed("Who is the author of this application?"),
        default=STATIC_DEFAULTS["author"],
    ),
    Question(
        key="apiRoot",
        message=_fixed("What is the root of your API?"),
        default=STATIC_DEFAULTS["apiRoot"],
    ),
    Question(
        key="apiDir",
        message=lambda answers: (
            f"Where to put the API code (inside ./{answers['srcDir']})?"
        ),
        default=STATIC_DEFAULTS["apiDir"],
        depends_on=("srcDir",),
    ),
)


def resolve_default(
    key: str,
    stored: Mapping[str, str],
    questions: Sequence[Question] = QUESTIONS,
) -> str:
    """Return ``stored[key]`` if present, else the question's static default."""
    if key in stored:
        return stored[key]
    for question in questions:
        if question.key == key:
            return question.default
    return STATIC_DEFAULTS[key]


# ---------------------------------------------------------------------------
# Ask functions (the interactive boundary)
# ---------------------------------------------------------------------------


def rich_ask(message: str, default: str) -> str:
    """Ask on the terminal through Rich; an empty reply yields *default*."""
    return Prompt.ask(message, default=default, console=console)


def accept_defaults(message: str, default: str) -> str:
    """Non-interactive ask that accepts every default (``--yes``)."""
    return default


# ---------------------------------------------------------------------------
# PromptSequence
# ---------------------------------------------------------------------------


class PromptSequence:
    """Walks :data:`QUESTIONS` in order and builds an :class:`AnswerSet`."""

    def __init__(
        self,
        questions: Sequence[Question] = QUESTIONS,
        ask: AskFunc = rich_ask,
    ) -> None:
        self.questions = tuple(questions)
        self.ask = ask

    def defaults(self, stored: Mapping[str, str]) -> dict[str, str]:
        """Resolve every question's default against *stored* answers."""
        return {
            q.key: resolve_default(q.key, stored, self.questions)
            for q in self.questions
        }

    async def collect(self, stored: Mapping[str, str]) -> AnswerSet:
        """Ask every question in order and return the completed answers.

        ``ask`` runs on the calling thread so that Ctrl-C reaches it as a
        ``KeyboardInterrupt``.

        Args:
            stored: Answers previously saved for the destination directory;
                they replace the static defaults.

        Raises:
            PromptAbandoned: If the input stream closes (``EOFError``) or the
                user interrupts before the last answer.
            ValueError: If a question is ordered before one it depends on.
        """
        answers: dict[str, str] = {}
        for question in self.questions:
            default = resolve_default(question.key, stored, self.questions)
            message = question.render_message(answers)
            try:
                reply = self.ask(message, default)
            except (EOFError, KeyboardInterrupt) as exc:
                raise PromptAbandoned(question.key, len(answers)) from exc
            answers[question.key] = default if reply in (None, "") else str(reply)
        return AnswerSet.from_mapping(answers)
