"""Tests for the prompt sequence (src.scaffolder.prompts).

Covers:
- resolve_default for stored and missing keys
- The fixed question order and the srcDir -> apiDir message dependency
- Answer collection: defaults, explicit replies, empty replies
- Abandoned input (EOF / interrupt)
"""

from __future__ import annotations

import pytest

from src.scaffolder.answers import ANSWER_KEYS, STATIC_DEFAULTS
from src.scaffolder.errors import PromptAbandoned
from src.scaffolder.prompts import (
    QUESTIONS,
    PromptSequence,
    Question,
    accept_defaults,
    resolve_default,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# resolve_default
# ---------------------------------------------------------------------------


class TestResolveDefault:
    @pytest.mark.parametrize("key", ANSWER_KEYS)
    def test_stored_value_wins(self, key):
        assert resolve_default(key, {key: "stored-value"}) == "stored-value"

    @pytest.mark.parametrize("key", ANSWER_KEYS)
    def test_falls_back_to_static_default(self, key):
        assert resolve_default(key, {}) == STATIC_DEFAULTS[key]

    def test_stored_empty_string_is_a_value(self):
        assert resolve_default("author", {"author": ""}) == ""

    def test_prior_record_scenario(self):
        stored = {"srcDir": "lib", "author": "Jane"}
        resolved = {key: resolve_default(key, stored) for key in ANSWER_KEYS}
        assert resolved["srcDir"] == "lib"
        assert resolved["author"] == "Jane"
        for key in ("name", "description", "apiRoot", "apiDir"):
            assert resolved[key] == STATIC_DEFAULTS[key]


# ---------------------------------------------------------------------------
# Question definitions
# ---------------------------------------------------------------------------


class TestQuestions:
    def test_fixed_order(self):
        assert tuple(q.key for q in QUESTIONS) == ANSWER_KEYS

    def test_api_dir_message_embeds_src_dir(self):
        api_dir = next(q for q in QUESTIONS if q.key == "apiDir")
        message = api_dir.render_message({"srcDir": "server/code"})
        assert "server/code" in message

    def test_api_dir_depends_on_src_dir(self):
        api_dir = next(q for q in QUESTIONS if q.key == "apiDir")
        assert api_dir.depends_on == ("srcDir",)
        with pytest.raises(ValueError, match="srcDir"):
            api_dir.render_message({})

    def test_static_messages(self):
        name = QUESTIONS[0]
        assert name.render_message({}) == "What is the application name?"


# ---------------------------------------------------------------------------
# PromptSequence.collect
# ---------------------------------------------------------------------------


class TestCollect:
    @pytest.mark.asyncio
    async def test_accepting_defaults(self, scripted_ask):
        ask = scripted_ask()
        answers = await PromptSequence(ask=ask).collect({})

        assert answers.as_context() == STATIC_DEFAULTS
        assert [default for _msg, default in ask.asked] == [STATIC_DEFAULTS[k] for k in ANSWER_KEYS]

    @pytest.mark.asyncio
    async def test_stored_answers_become_defaults(self, scripted_ask):
        ask = scripted_ask()
        answers = await PromptSequence(ask=ask).collect({"srcDir": "lib", "author": "Jane"})

        defaults = dict(zip(ANSWER_KEYS, (d for _m, d in ask.asked)))
        assert defaults["srcDir"] == "lib"
        assert defaults["author"] == "Jane"
        assert answers.src_dir == "lib"
        assert answers.author == "Jane"

    @pytest.mark.asyncio
    async def test_explicit_replies(self, scripted_ask):
        ask = scripted_ask(["orders", "Order service", "lib", "Jane", "/v1", "routes"])
        answers = await PromptSequence(ask=ask).collect({})

        assert answers.as_context() == {
            "name": "orders",
            "description": "Order service",
            "srcDir": "lib",
            "author": "Jane",
            "apiRoot": "/v1",
            "apiDir": "routes",
        }

    @pytest.mark.asyncio
    async def test_api_dir_message_uses_answered_src_dir(self, scripted_ask):
        ask = scripted_ask(["svc", "", "backend"])
        await PromptSequence(ask=ask).collect({"srcDir": "lib"})

        api_dir_message = ask.asked[-1][0]
        assert "backend" in api_dir_message
        assert "lib" not in api_dir_message

    @pytest.mark.asyncio
    async def test_empty_and_none_replies_take_default(self, scripted_ask):
        ask = scripted_ask(["", None])
        answers = await PromptSequence(ask=ask).collect({})
        assert answers.name == STATIC_DEFAULTS["name"]
        assert answers.description == STATIC_DEFAULTS["description"]

    @pytest.mark.asyncio
    async def test_accept_defaults_ask(self):
        answers = await PromptSequence(ask=accept_defaults).collect({"apiRoot": "/v3"})
        assert answers.api_root == "/v3"

    @pytest.mark.asyncio
    async def test_input_closed_raises_prompt_abandoned(self, scripted_ask):
        ask = scripted_ask(["svc", "desc"], close_after=2)
        with pytest.raises(PromptAbandoned) as exc_info:
            await PromptSequence(ask=ask).collect({})

        assert exc_info.value.key == "srcDir"
        assert exc_info.value.answered == 2
        assert isinstance(exc_info.value.__cause__, EOFError)

    @pytest.mark.asyncio
    async def test_keyboard_interrupt_raises_prompt_abandoned(self):
        def interrupted(message: str, default: str) -> str:
            raise KeyboardInterrupt

        with pytest.raises(PromptAbandoned) as exc_info:
            await PromptSequence(ask=interrupted).collect({})
        assert exc_info.value.answered == 0

    @pytest.mark.asyncio
    async def test_misordered_questions_rejected(self, scripted_ask):
        reordered = (QUESTIONS[-1],) + QUESTIONS[:-1]
        with pytest.raises(ValueError):
            await PromptSequence(questions=reordered, ask=scripted_ask()).collect({})

    def test_defaults_helper(self):
        seq = PromptSequence(ask=accept_defaults)
        defaults = seq.defaults({"author": "Jane"})
        assert defaults["author"] == "Jane"
        assert defaults["srcDir"] == "src"

    @pytest.mark.asyncio
    async def test_custom_question_set(self, scripted_ask):
        questions = (
            Question(key="name", message=lambda a: "Name?", default="svc"),
        )
        answers = await PromptSequence(questions=questions, ask=scripted_ask()).collect({})
        assert answers.name == "svc"
        assert answers.src_dir == STATIC_DEFAULTS["srcDir"]
