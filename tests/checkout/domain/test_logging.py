import structlog
from checkout.utils.logging import get_log_level, order_log_context, redact_card_numbers


class TestCardRedaction:
    def test_grouped_card_number_is_masked(self):
        event = redact_card_numbers(None, None, {"event": "charging 4111 1111 1111 1111 now"})
        assert "4111" not in event["event"]
        assert "[card redacted]" in event["event"]

    def test_plain_card_number_is_masked(self):
        event = redact_card_numbers(None, None, {"card": "4111111111111111"})
        assert event["card"] == "[card redacted]"

    def test_order_numbers_and_short_numbers_are_kept(self):
        event = redact_card_numbers(
            None, None, {"order_number": "ORD-0123456789ABCDEF", "zip": "62701", "quantity": 3}
        )
        assert event == {"order_number": "ORD-0123456789ABCDEF", "zip": "62701", "quantity": 3}

    def test_masked_card_is_kept(self):
        event = redact_card_numbers(None, None, {"card": "************1234"})
        assert event["card"] == "************1234"


class TestLogLevel:
    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert get_log_level() == "ERROR"

    def test_level_follows_environment(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert get_log_level() == "INFO"


class TestOrderLogContext:
    def test_order_number_is_bound_inside_block_only(self):
        with order_log_context("ORD-0000000000000001", status="approved"):
            bound = structlog.contextvars.get_contextvars()
            assert bound["order_number"] == "ORD-0000000000000001"
            assert bound["status"] == "approved"

        assert "order_number" not in structlog.contextvars.get_contextvars()
