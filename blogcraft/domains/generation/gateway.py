from functools import lru_cache
from typing import Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from blogcraft.core.config import Settings, get_settings
from blogcraft.core.errors import UpstreamError
from blogcraft.core.logging import get_logger

logger = get_logger(__name__)


class GenerationGateway:
    """Chat completions against a hosted OpenAI-compatible API.

    One attempt per call: the client is built with retries disabled and the
    transport's default timeout. Any client or API failure is raised as
    ``UpstreamError`` carrying the underlying message.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[AsyncOpenAI] = None):
        self.settings = settings or get_settings()
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.llm_api_key,
                base_url=self.settings.llm_base_url,
                max_retries=0,
            )
        return self._client

    async def complete(self, messages: List[Dict[str, str]], *, max_tokens: Optional[int] = None) -> str:
        """Send the messages and return the generated text ("" when empty)"""
        logger.debug("Requesting completion model=%s messages=%d", self.settings.llm_model, len(messages))
        try:
            client = self._get_client()
            completion = await client.chat.completions.create(
                model=self.settings.llm_model,
                messages=messages,
                temperature=self.settings.llm_temperature,
                max_tokens=max_tokens or self.settings.llm_max_tokens,
            )
        except OpenAIError as exc:
            logger.error("Generation request failed: %s", exc)
            raise UpstreamError(str(exc) or "Failed to generate content") from exc

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""


@lru_cache
def get_generation_gateway() -> GenerationGateway:
    """Shared gateway for FastAPI dependency injection"""
    return GenerationGateway()
