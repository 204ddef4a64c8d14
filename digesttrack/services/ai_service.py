"""
Claude integration for ingredient and trigger detection.

Detection is a convenience for filling in meal entries. Any failure (network,
rate limit, malformed response) is logged and degrades to empty lists so the
user can still enter ingredients by hand.
"""

import asyncio
import json
import logging
import random
import re
from functools import wraps
from typing import List

import anthropic
import httpx
from anthropic import Anthropic
from pydantic import BaseModel, TypeAdapter, ValidationError

from digesttrack.config import settings
from digesttrack.schemas import IngredientAnalysisSchema, TriggerAnalysisSchema
from digesttrack.services.prompts import (
    INGREDIENT_DETECTION_SYSTEM_PROMPT,
    TRIGGER_DETECTION_SYSTEM_PROMPT,
)

logger = logging.getLogger(__name__)


class ServiceUnavailableError(Exception):
    """AI service could not be reached or returned a server error."""

    pass


class RateLimitError(Exception):
    """AI service rejected the request due to rate limiting."""

    pass


def _strip_markdown_json(text: str) -> str:
    """Strip markdown code block wrappers from JSON text."""
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()
    return text


def _fix_trailing_commas(text: str) -> str:
    """Fix trailing commas in JSON (common LLM error)."""
    text = re.sub(r",\s*}", "}", text)
    text = re.sub(r",\s*]", "]", text)
    return text


def retry_on_connection_error(max_attempts=3, base_delay=1.0):
    """
    Retry decorator for API calls that may fail due to transient network issues.

    Args:
        max_attempts: Maximum retry attempts (default 3)
        base_delay: Base delay in seconds for exponential backoff (default 1.0)
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            last_exception = None

            for attempt in range(max_attempts):
                try:
                    return await func(*args, **kwargs)
                except anthropic.APIConnectionError as e:
                    last_exception = e

                    if attempt < max_attempts - 1:
                        delay = base_delay * (2**attempt)
                        jitter = delay * 0.1 * (2 * random.random() - 1)
                        sleep_time = delay + jitter

                        logger.warning(
                            "Connection error on attempt %d/%d, retrying in %.1fs...",
                            attempt + 1,
                            max_attempts,
                            sleep_time,
                        )
                        await asyncio.sleep(sleep_time)
                    else:
                        logger.error("All %d attempts failed", max_attempts)

            raise ServiceUnavailableError(
                "AI service temporarily unavailable after retries"
            ) from last_exception

        return wrapper

    return decorator


class IngredientDetector:
    """Guesses ingredients and likely trigger ingredients with Claude."""

    def __init__(self):
        timeout = httpx.Timeout(
            timeout=settings.anthropic_timeout,
            connect=settings.anthropic_connect_timeout,
        )
        self.client = Anthropic(api_key=settings.anthropic_api_key, timeout=timeout)
        self.model = settings.detector_model

    def _call_with_schema_retry(
        self,
        messages: list[dict],
        schema_class: type[BaseModel],
        system: str,
        max_retries: int = 2,
        prefill: str = "{",
    ) -> dict:
        """
        Call Claude and validate the JSON reply against schema_class.

        On a schema failure the bad reply and the validation error are
        appended to the conversation so the model can correct itself.

        Raises:
            ValueError: If every attempt fails validation
        """
        for attempt in range(1 + max_retries):
            call_messages = list(messages)
            call_messages.append({"role": "assistant", "content": prefill})

            response = self.client.messages.create(
                model=self.model,
                max_tokens=1024,
                temperature=0.3,
                system=system,
                messages=call_messages,
            )

            raw_text = "".join(
                block.text for block in response.content if hasattr(block, "text")
            ).strip()
            json_str = _fix_trailing_commas(_strip_markdown_json(prefill + raw_text))

            try:
                parsed = json.loads(json_str)
                return TypeAdapter(schema_class).validate_python(parsed).model_dump()
            except (json.JSONDecodeError, ValidationError) as e:
                logger.warning(
                    "AI response schema validation failed (attempt %d/%d) for %s: %s",
                    attempt + 1,
                    1 + max_retries,
                    schema_class.__name__,
                    e,
                )
                if attempt < max_retries:
                    messages.append({"role": "assistant", "content": prefill + raw_text})
                    messages.append(
                        {
                            "role": "user",
                            "content": (
                                f"Your response had a schema error:\n{e}\n\n"
                                "Please fix and return valid JSON matching the required schema."
                            ),
                        }
                    )
                    continue
                raise ValueError(
                    f"AI response failed schema validation after {1 + max_retries} attempts"
                ) from e

        raise ValueError("AI response failed schema validation")

    @retry_on_connection_error()
    async def _request(
        self, messages: list[dict], schema_class: type[BaseModel], system: str
    ) -> dict:
        try:
            return self._call_with_schema_retry(messages, schema_class, system)
        except anthropic.RateLimitError as e:
            raise RateLimitError("Too many requests, please try again in 1 minute") from e
        except anthropic.APIStatusError as e:
            if e.status_code >= 500:
                raise ServiceUnavailableError("AI service error") from e
            raise ValueError(f"Request error: {e.message}") from e

    async def detect_ingredients(self, dish_name: str) -> dict:
        """
        Guess the ingredients of a dish and flag likely triggers.

        Returns:
            {"ingredients": [...], "trigger_ingredients": [{ingredient, category,
            confidence, reason}, ...]}, both empty if detection fails.
        """
        messages = [{"role": "user", "content": f'Analyze the item "{dish_name}".'}]
        try:
            return await self._request(
                messages, IngredientAnalysisSchema, INGREDIENT_DETECTION_SYSTEM_PROMPT
            )
        except (ServiceUnavailableError, RateLimitError, ValueError) as e:
            logger.warning("Ingredient detection failed for %r: %s", dish_name, e)
        except Exception:
            logger.exception("Unexpected error detecting ingredients for %r", dish_name)
        return {"ingredients": [], "trigger_ingredients": []}

    async def detect_triggers(self, ingredients: List[str]) -> List[dict]:
        """Flag likely trigger ingredients; empty list if detection fails."""
        if not ingredients:
            return []
        messages = [
            {
                "role": "user",
                "content": "Analyze these ingredients: " + ", ".join(ingredients),
            }
        ]
        try:
            result = await self._request(
                messages, TriggerAnalysisSchema, TRIGGER_DETECTION_SYSTEM_PROMPT
            )
            return result["trigger_ingredients"]
        except (ServiceUnavailableError, RateLimitError, ValueError) as e:
            logger.warning("Trigger detection failed for %d ingredients: %s", len(ingredients), e)
        except Exception:
            logger.exception("Unexpected error detecting triggers")
        return []
