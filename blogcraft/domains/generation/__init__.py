from blogcraft.domains.generation.prompts import build_messages, build_prompt
from blogcraft.domains.generation.schemas import (
    GenerateRequest, GenerateResponse, ImproveRequest, ImproveResponse
)

__all__ = [
    "build_messages", "build_prompt",
    "GenerateRequest", "GenerateResponse", "ImproveRequest", "ImproveResponse",
]
