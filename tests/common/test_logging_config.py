from __future__ import annotations

import json
import logging

from src.workplus_analytics.workplus_analytics.common.logging_config import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord("workplus.test", logging.INFO, __file__, 10, "Built %s", ("leave",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_lines_carry_known_extras_only():
    line = json.loads(JSONFormatter().format(_record(dashboard="leave", record_count=3, secret="x")))

    assert line["message"] == "Built leave"
    assert line["level"] == "INFO"
    assert line["dashboard"] == "leave"
    assert line["record_count"] == 3
    assert "secret" not in line


def test_setup_logging_replaces_root_handlers():
    root = logging.getLogger()
    saved = (root.level, list(root.handlers))
    try:
        setup_logging("debug", json_output=True)
        setup_logging("warning", json_output=False)

        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("werkzeug").level == logging.WARNING
    finally:
        root.setLevel(saved[0])
        root.handlers = saved[1]
