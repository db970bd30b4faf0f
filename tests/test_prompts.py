"""Tests for prompt text and message assembly."""

import uuid

from blogcraft.domains.blogs.entities import Version
from blogcraft.domains.generation.prompts import (
    EDITOR_SYSTEM_PROMPT,
    WRITER_SYSTEM_PROMPT,
    build_improve_messages,
    build_messages,
    build_prompt,
)


def _turn(number: int, user_prompt, content: str, ai_response=None) -> Version:
    return Version(
        id=uuid.uuid4(),
        blog_id=uuid.uuid4(),
        content=content,
        version_number=number,
        user_prompt=user_prompt,
        ai_response=ai_response,
    )


class TestBuildPrompt:
    """Tests for build_prompt()."""

    def test_new_post_from_topic(self):
        assert build_prompt("Sourdough", None, None) == "Write a blog post about: Sourdough"

    def test_revision_from_feedback(self):
        prompt = build_prompt("Sourdough", "Bread is great.", "More detail on starters")

        assert prompt == (
            "Improve this blog post based on the feedback: More detail on starters"
            "\n\nOriginal post: Bread is great."
        )

    def test_revision_without_content(self):
        prompt = build_prompt(None, None, "Shorter")
        assert prompt.endswith("Original post: ")


class TestBuildMessages:
    """Tests for build_messages()."""

    def test_without_history(self):
        messages = build_messages("Write a blog post about: Kites")

        assert messages == [
            {"role": "system", "content": WRITER_SYSTEM_PROMPT},
            {"role": "user", "content": "Write a blog post about: Kites"},
        ]

    def test_prior_turns_in_order(self):
        turns = [
            _turn(1, "Write a blog post about: Kites", "Kites v1", ai_response="Kites v1"),
            _turn(2, "Improve: add history", "Kites v2"),
        ]

        messages = build_messages("Improve: shorter", turns)

        assert [m["role"] for m in messages] == ["system", "user", "assistant", "user", "assistant", "user"]
        assert messages[1]["content"] == "Write a blog post about: Kites"
        assert messages[2]["content"] == "Kites v1"
        assert messages[4]["content"] == "Kites v2"
        assert messages[-1]["content"] == "Improve: shorter"

    def test_missing_user_prompt_becomes_empty(self):
        messages = build_messages("next", [_turn(1, None, "Body")])
        assert messages[1] == {"role": "user", "content": ""}


class TestBuildImproveMessages:
    """Tests for build_improve_messages()."""

    def test_editor_instruction(self):
        messages = build_improve_messages("Body text", "Add an example")

        assert messages[0] == {"role": "system", "content": EDITOR_SYSTEM_PROMPT}
        assert "Original blog post: Body text" in messages[1]["content"]
        assert "User feedback: Add an example" in messages[1]["content"]
