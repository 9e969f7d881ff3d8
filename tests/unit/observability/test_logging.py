"""Tests for structured logging."""

import json
from collections.abc import Callable, Generator
from io import StringIO

import pytest
import structlog

from cafebot.observability.logging import PIIRedactor, get_logger, setup_logging
from tests.factories import SignalFactory


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    yield
    structlog.reset_defaults()


@pytest.fixture
def log_output() -> Callable[..., StringIO]:
    """Configure logging as the app does, rendering into a buffer."""

    def _configure(level: str = "INFO", redact_pii: bool = True) -> StringIO:
        output = StringIO()
        setup_logging(level=level, format="json", redact_pii=redact_pii)
        structlog.configure(logger_factory=structlog.PrintLoggerFactory(output))
        return output

    return _configure


def events(output: StringIO) -> dict[str, dict]:
    """Rendered log lines keyed by event name."""
    parsed = [json.loads(line) for line in output.getvalue().splitlines() if line.strip()]
    return {line["event"]: line for line in parsed}


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_console_format(self) -> None:
        setup_logging(level="DEBUG", format="console", redact_pii=False)
        get_logger("test").debug("test_message")

    def test_level_filtering(self, log_output) -> None:
        output = log_output(level="WARNING", redact_pii=False)

        logger = get_logger("test")
        logger.info("ignored")
        logger.warning("kept")

        assert list(events(output)) == ["kept"]

    def test_timestamp_is_not_redacted(self, log_output) -> None:
        output = log_output()

        get_logger("test").info("turn_dispatched", status="waiting")

        line = events(output)["turn_dispatched"]
        assert line["level"] == "info"
        assert line["status"] == "waiting"
        assert line["timestamp"].startswith("20")


class TestPIIRedactor:
    """Tests for the redaction processor on its own."""

    @pytest.fixture
    def redactor(self) -> PIIRedactor:
        return PIIRedactor()

    def test_masks_name_keys(self, redactor: PIIRedactor) -> None:
        result = redactor(None, "info", {"user_name": "Dave", "userName_patternAny": "dave"})  # type: ignore[arg-type]

        assert result == {"user_name": "[REDACTED]", "userName_patternAny": "[REDACTED]"}

    def test_text_keeps_only_its_length(self, redactor: PIIRedactor) -> None:
        result = redactor(None, "info", {"text": "my phone is 555 0100"})  # type: ignore[arg-type]

        assert result["text"] == "[TEXT len=20]"

    def test_leaves_routing_fields_alone(self, redactor: PIIRedactor) -> None:
        event_dict = {
            "event": "turn_dispatched",
            "conversation_id": "conv-1",
            "user_id": "user-1",
            "intent": "BookTable",
            "status": "waiting",
            "user_name": None,
        }

        assert redactor(None, "info", dict(event_dict)) == event_dict  # type: ignore[arg-type]


class TestDispatchLogs:
    """What a real turn writes to the log."""

    @pytest.mark.asyncio
    async def test_name_from_identification_is_masked(
        self, log_output, orchestrator, state, make_turn
    ) -> None:
        output = log_output()

        await orchestrator.dispatch(
            SignalFactory.create("WhoAreYou", userName_patternAny="dave"),
            state,
            make_turn("my name is dave"),
        )

        line = events(output)["user_name_updated"]
        assert line["user_name"] == "[REDACTED]"
        assert line["user_id"] == "user-1"
        assert "Dave" not in output.getvalue()

    @pytest.mark.asyncio
    async def test_unrecognized_utterance_is_masked(
        self, log_output, orchestrator, state, make_turn
    ) -> None:
        output = log_output()

        await orchestrator.dispatch(SignalFactory.create("None"), state, make_turn("call dave on 555 0100"))

        line = events(output)["intent_not_understood"]
        assert line["text"] == "[TEXT len=21]"
        assert line["intent"] == "None"
        assert "555 0100" not in output.getvalue()

    @pytest.mark.asyncio
    async def test_redaction_can_be_disabled(self, log_output, orchestrator, state, make_turn) -> None:
        output = log_output(redact_pii=False)

        await orchestrator.dispatch(SignalFactory.create("None"), state, make_turn("hello there"))

        assert events(output)["intent_not_understood"]["text"] == "hello there"
