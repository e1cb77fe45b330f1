import json
import logging

from observability import build_log_context, get_logger, log_event


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def test_build_log_context_defaults(monkeypatch):
    monkeypatch.delenv("TXSIGNER_SERVICE_NAME", raising=False)
    ctx = build_log_context(tool="txsigner", chain_id=1)
    assert ctx["service"] == "txsigner"
    assert ctx["tool"] == "txsigner"
    assert ctx["chain_id"] == 1
    assert len(ctx["request_id"]) == 12


def test_log_event_emits_json_and_redacts_secrets():
    logger = get_logger()
    handler = _ListHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

    log_event("evt", ctx=build_log_context(tool="t", request_id="abc"), data={"private_key": "0xdead", "nonce": 1})

    payload = json.loads(handler.records[-1].getMessage())
    assert payload["event"] == "evt"
    assert payload["request_id"] == "abc"
    assert payload["data"] == {"private_key": "***REDACTED***", "nonce": 1}


def test_log_event_respects_level(monkeypatch):
    monkeypatch.setenv("TXSIGNER_LOG_LEVEL", "error")
    logger = get_logger()
    handler = _ListHandler()
    logger.addHandler(handler)

    log_event("quiet", ctx=build_log_context(tool="t"))
    assert handler.records == []


def test_env_level_applies_with_foreign_handler_attached(monkeypatch):
    monkeypatch.setenv("TXSIGNER_LOG_LEVEL", "error")
    logger = logging.getLogger("txsigner")
    logger.addHandler(_ListHandler())

    assert get_logger().level == logging.ERROR
    assert sum(h.get_name() == "txsigner-stderr" for h in logger.handlers) == 1


def test_explicit_level_wins_over_env(monkeypatch):
    monkeypatch.setenv("TXSIGNER_LOG_LEVEL", "error")
    get_logger().setLevel(logging.INFO)
    assert get_logger().level == logging.INFO
