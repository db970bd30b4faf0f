"""Prompt text and chat message assembly for blog generation."""

from typing import Dict, List, Optional, Sequence

from blogcraft.domains.blogs.entities import Version

WRITER_SYSTEM_PROMPT = (
    "You are a professional blog post writer. Write a well-structured, engaging blog post "
    "about the given topic. When asked to improve, maintain the overall structure while "
    "incorporating the requested changes."
)

EDITOR_SYSTEM_PROMPT = (
    "You are a professional blog post editor. Improve the content based on user feedback "
    "while maintaining the original topic and structure."
)


def build_prompt(topic: Optional[str], content: Optional[str], feedback: Optional[str]) -> str:
    """Instruction for a first draft, or for a revision when feedback is given"""
    if feedback:
        return f"Improve this blog post based on the feedback: {feedback}\n\nOriginal post: {content or ''}"
    return f"Write a blog post about: {topic or ''}"


def build_messages(prompt: str, prior_turns: Sequence[Version] = ()) -> List[Dict[str, str]]:
    """System instruction, earlier turns oldest first, then the new prompt"""
    messages = [{"role": "system", "content": WRITER_SYSTEM_PROMPT}]
    for turn in prior_turns:
        messages.append({"role": "user", "content": turn.user_prompt or ""})
        messages.append({"role": "assistant", "content": turn.assistant_text})
    messages.append({"role": "user", "content": prompt})
    return messages


def build_improve_messages(content: str, suggestion: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": EDITOR_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": (
                f"Original blog post: {content}\n\nUser feedback: {suggestion}\n\n"
                "Please improve this blog post based on the feedback."
            ),
        },
    ]
