"""
Unit tests for IngredientDetector (AI integration).

The Anthropic client is replaced with a MagicMock, so no API calls are made.
"""
from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import pytest

from digesttrack.services.ai_service import (
    IngredientDetector,
    ServiceUnavailableError,
    _fix_trailing_commas,
    _strip_markdown_json,
    retry_on_connection_error,
)


def _reply(text: str) -> MagicMock:
    """Claude response whose text continues the "{" prefill."""
    block = MagicMock()
    block.text = text
    response = MagicMock()
    response.content = [block]
    return response


@pytest.fixture
def detector() -> IngredientDetector:
    detector = IngredientDetector()
    detector.client = MagicMock()
    return detector


def _connection_error() -> anthropic.APIConnectionError:
    return anthropic.APIConnectionError(
        request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    )


class TestJsonCleanup:
    def test_strip_markdown_json(self):
        assert _strip_markdown_json('```json\n{"a": 1}\n```') == '{"a": 1}'
        assert _strip_markdown_json('```\n{"a": 1}\n```') == '{"a": 1}'
        assert _strip_markdown_json('{"a": 1}') == '{"a": 1}'

    def test_fix_trailing_commas(self):
        assert _fix_trailing_commas('{"a": [1, 2,], }') == '{"a": [1, 2]}'


class TestDetectIngredients:
    @pytest.mark.asyncio
    async def test_parses_reply(self, detector):
        detector.client.messages.create.return_value = _reply(
            '"ingredients": ["pasta", "cream"], "trigger_ingredients": '
            '[{"ingredient": "cream", "category": "dairy", "confidence": 0.9, '
            '"reason": "Contains lactose"}]}'
        )

        result = await detector.detect_ingredients("Fettuccine Alfredo")

        assert result["ingredients"] == ["pasta", "cream"]
        assert result["trigger_ingredients"][0]["ingredient"] == "cream"
        assert result["trigger_ingredients"][0]["category"] == "dairy"
        kwargs = detector.client.messages.create.call_args.kwargs
        assert kwargs["messages"][-1] == {"role": "assistant", "content": "{"}
        assert "Fettuccine Alfredo" in kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_retries_after_schema_error(self, detector):
        detector.client.messages.create.side_effect = [
            _reply('"ingredients": "not a list"}'),
            _reply('"ingredients": ["rice"], "trigger_ingredients": [],}'),
        ]

        result = await detector.detect_ingredients("Rice bowl")

        assert result == {"ingredients": ["rice"], "trigger_ingredients": []}
        assert detector.client.messages.create.call_count == 2

    @pytest.mark.asyncio
    async def test_degrades_to_empty_on_repeated_bad_json(self, detector):
        detector.client.messages.create.return_value = _reply("not json at all")

        result = await detector.detect_ingredients("Mystery stew")

        assert result == {"ingredients": [], "trigger_ingredients": []}
        assert detector.client.messages.create.call_count == 3

    @pytest.mark.asyncio
    async def test_degrades_to_empty_when_unreachable(self, detector):
        detector.client.messages.create.side_effect = _connection_error()

        with patch("digesttrack.services.ai_service.asyncio.sleep", new=AsyncMock()):
            result = await detector.detect_ingredients("Pizza")

        assert result == {"ingredients": [], "trigger_ingredients": []}
        assert detector.client.messages.create.call_count == 3

    @pytest.mark.asyncio
    async def test_degrades_to_empty_on_unexpected_error(self, detector):
        detector.client.messages.create.side_effect = RuntimeError("boom")

        result = await detector.detect_ingredients("Pizza")

        assert result == {"ingredients": [], "trigger_ingredients": []}


class TestDetectTriggers:
    @pytest.mark.asyncio
    async def test_parses_reply(self, detector):
        detector.client.messages.create.return_value = _reply(
            '"trigger_ingredients": [{"ingredient": "onion", "category": "fodmap", '
            '"confidence": 0.8, "reason": "High in fructans"}]}'
        )

        triggers = await detector.detect_triggers(["onion", "rice"])

        assert [t["ingredient"] for t in triggers] == ["onion"]
        assert "onion, rice" in detector.client.messages.create.call_args.kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_empty_input_skips_api(self, detector):
        assert await detector.detect_triggers([]) == []
        detector.client.messages.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_degrades_to_empty(self, detector):
        detector.client.messages.create.side_effect = RuntimeError("boom")

        assert await detector.detect_triggers(["onion"]) == []


class TestRetryOnConnectionError:
    @pytest.mark.asyncio
    async def test_succeeds_after_transient_failure(self):
        calls = []

        @retry_on_connection_error(max_attempts=3, base_delay=0)
        async def flaky():
            calls.append(1)
            if len(calls) < 2:
                raise _connection_error()
            return "ok"

        assert await flaky() == "ok"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_raises_service_unavailable_after_max_attempts(self):
        @retry_on_connection_error(max_attempts=2, base_delay=0)
        async def always_down():
            raise _connection_error()

        with pytest.raises(ServiceUnavailableError):
            await always_down()
