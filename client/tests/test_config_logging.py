"""
Tests for environment configuration and log formatting.
"""

import json
import logging

import config as config_module
from config import get_env_bool, get_env_int, reload_config
from logging_config import (
    DevelopmentFormatter,
    JSONFormatter,
    get_logger,
    player_id_var,
    round_number_var,
)


# =============================================================================
# Config
# =============================================================================

class TestEnvHelpers:

    def test_bool(self, monkeypatch):
        monkeypatch.setenv("FLAG", "yes")
        assert get_env_bool("FLAG") is True
        monkeypatch.setenv("FLAG", "off")
        assert get_env_bool("FLAG", True) is False
        monkeypatch.setenv("FLAG", "maybe")
        assert get_env_bool("FLAG", True) is True

    def test_int(self, monkeypatch):
        monkeypatch.setenv("NUM", "250")
        assert get_env_int("NUM") == 250
        monkeypatch.setenv("NUM", "lots")
        assert get_env_int("NUM", 7) == 7


class TestReloadConfig:

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("SERVER_URL", "ws://example:9000/ws")
        monkeypatch.setenv("DEFAULT_SORT", "SUIT")
        monkeypatch.setenv("DEFAULT_TARGET_SCORE", "50")
        try:
            cfg = reload_config()
            assert cfg.SERVER_URL == "ws://example:9000/ws"
            assert cfg.DEFAULT_SORT == "suit"
            assert cfg.DEFAULT_TARGET_SCORE == 50
            assert config_module.config is cfg
        finally:
            monkeypatch.undo()
            reload_config()

    def test_unknown_sort_falls_back(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_SORT", "colour")
        try:
            assert reload_config().DEFAULT_SORT == "rank"
        finally:
            monkeypatch.undo()
            reload_config()


# =============================================================================
# Logging
# =============================================================================

def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("transport", logging.WARNING, __file__, 1, "Dropping passTurn", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:

    def test_json_includes_context(self):
        player_token = player_id_var.set("p1")
        round_token = round_number_var.set(3)
        try:
            line = JSONFormatter().format(make_record(command="passTurn", server_url="ws://x"))
        finally:
            player_id_var.reset(player_token)
            round_number_var.reset(round_token)

        data = json.loads(line)
        assert data["player_id"] == "p1"
        assert data["round_number"] == 3
        assert data["command"] == "passTurn"
        assert data["server_url"] == "ws://x"
        assert data["message"] == "Dropping passTurn"

    def test_development_format(self):
        line = DevelopmentFormatter().format(make_record(message_type="error"))
        assert "msg=error" in line
        assert line.endswith("Dropping passTurn")

    def test_context_logger_merges_extra(self, caplog):
        log = get_logger("bigtwo.test").with_context(server_url="ws://x")
        with caplog.at_level(logging.INFO, logger="bigtwo.test"):
            log.info("hello", extra={"command": "chat"})

        record = caplog.records[-1]
        assert record.server_url == "ws://x"
        assert record.command == "chat"
