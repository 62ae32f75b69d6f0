from __future__ import annotations

import logging
from typing import Optional

from openai import APIConnectionError, APITimeoutError, BadRequestError, OpenAI, RateLimitError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import AppConfig


logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Raised when the model returns nothing usable."""


class LLMClient:
    def __init__(self, config: AppConfig):
        self.client = OpenAI(
            api_key=config.openai_api_key or None,
            base_url=config.openai_base_url or None,
            timeout=config.request_timeout_s,
        )
        self.model = config.openai_model

    @retry(
        reraise=True,
        stop=stop_after_attempt(4),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=8),
        retry=retry_if_exception_type((APIConnectionError, APITimeoutError, RateLimitError)),
    )
    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        temperature: float = 1.0,
    ) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        # Some models only accept default temperature. Omit it unless explicitly non-default.
        kwargs = {
            "model": self.model,
            "messages": messages,
        }
        if temperature is not None and temperature != 1:
            kwargs["temperature"] = temperature

        try:
            resp = self.client.chat.completions.create(**kwargs)
        except BadRequestError as e:
            if "temperature" not in str(e) or "temperature" not in kwargs:
                raise
            logger.warning("Model %s rejected temperature, retrying with the default", self.model)
            kwargs.pop("temperature", None)
            resp = self.client.chat.completions.create(**kwargs)
        content = resp.choices[0].message.content or ""
        if not content.strip():
            raise GenerationError(f"Model {self.model} returned an empty completion")
        return content
