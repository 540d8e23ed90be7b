import json
import logging
import sys
import uuid

from friendkb.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord("friendkb.repo", level, __file__, 10, "repo.%s.success", ("create",), exc_info)
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    fmt = JsonFormatter(env="testing", service="friendkb")
    payload = json.loads(fmt.format(make_record(correlation_id="cid-1")))

    assert payload["message"] == "repo.create.success"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "friendkb.repo"
    assert payload["correlation_id"] == "cid-1"
    assert payload["service"] == "friendkb"
    assert payload["env"] == "testing"
    assert "version" in payload
    assert "timestamp" in payload


def test_json_formatter_includes_extras_and_stringifies_unknown_types():
    entity_id = uuid.uuid4()
    payload = json.loads(
        JsonFormatter().format(make_record(model="User", duration_ms=3, id=entity_id))
    )

    assert payload["model"] == "User"
    assert payload["duration_ms"] == 3
    assert payload["id"] == str(entity_id)
    # standard LogRecord attributes are not repeated as extras
    assert "args" not in payload
    assert "msg" not in payload


def test_json_formatter_missing_correlation_id():
    payload = json.loads(JsonFormatter().format(make_record()))
    assert payload["correlation_id"] == "-"


def test_json_formatter_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = make_record(level=logging.ERROR, exc_info=sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in payload["exc_info"]


def test_color_formatter_line_layout():
    line = ColorFormatter().format(make_record(correlation_id="cid-7"))

    assert ColorFormatter.COLOR_CODES["INFO"] in line
    assert ColorFormatter.COLOR_CODES["RESET"] in line
    assert "friendkb.repo" in line
    assert "cid-7" in line
    assert line.endswith("repo.create.success")


def test_color_formatter_honours_datefmt():
    record = make_record()
    record.created = 0.0

    line = ColorFormatter(datefmt="%Y").format(record)

    assert line.startswith("1970 | ") or line.startswith("1969 | ")
