import json
import logging
import warnings

from usconst import logging_config
from usconst.logging_config import LogContext, StructuredFormatter


def make_record(**extra):
    record = logging.LogRecord("usconst.test", logging.INFO, __file__, 10, "Built %d entries", (7,), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_formatter_writes_json():
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        formatter = StructuredFormatter()

    with LogContext(build_id="abc"):
        payload = json.loads(formatter.format(make_record(metrics={"count": 7})))

    assert payload["message"] == "Built 7 entries"
    assert payload["level"] == "INFO"
    assert payload["logger_name"] == "usconst.test"
    assert payload["build_id"] == "abc"
    assert payload["metrics"] == {"count": 7}


def test_context_fields_do_not_leak():
    with LogContext(build_id="abc"):
        pass
    payload = json.loads(StructuredFormatter().format(make_record()))
    assert "build_id" not in payload


def test_public_names_exist():
    for name in logging_config.__all__:
        assert hasattr(logging_config, name)
    assert not hasattr(logging_config, "setup_logging")
    assert not hasattr(logging_config.LoggerManager, "is_setup")
