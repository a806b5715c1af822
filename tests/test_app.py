import datetime
import json
import logging

from database import update_setting
from logging_setup import _JsonFormatter
from main import BrokenPipeErrorHandler


def test_session_lifetime_comes_from_settings(db_path):
    from app import create_app

    update_setting("session_timeout", 15)
    app = create_app({"TESTING": True})
    assert app.config["PERMANENT_SESSION_LIFETIME"] == datetime.timedelta(minutes=15)


def test_overrides_are_applied(db_path):
    from app import create_app

    app = create_app({"TESTING": True, "PERMANENT_SESSION_LIFETIME": datetime.timedelta(minutes=1)})
    assert app.config["PERMANENT_SESSION_LIFETIME"] == datetime.timedelta(minutes=1)


def test_broken_pipe_is_swallowed():
    def application(environ, start_response):
        raise BrokenPipeError()

    assert BrokenPipeErrorHandler(application)({}, None) == []


def test_json_log_format():
    record = logging.LogRecord("hmpi", logging.WARNING, __file__, 1, "value %s", ("high",), None)
    payload = json.loads(_JsonFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["msg"] == "value high"
    assert payload["name"] == "hmpi"
