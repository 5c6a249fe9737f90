import json
import logging

from voicenav.config import ObservabilityConfig
from voicenav.observability import JsonFormatter, configure_logging


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("voicenav.test", logging.INFO, __file__, 1, "Route confirmed", None, None)
    record.route_id = "581"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Route confirmed"
    assert payload["level"] == "INFO"
    assert payload["route_id"] == "581"


def test_configure_logging_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging(ObservabilityConfig(level="debug", structured=True))
        configure_logging(ObservabilityConfig(level="debug", structured=True))

        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
