"""Integration tests for the telegram-mcp CLI."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
import yaml

from cli.telegram_mcp import main
from contracts.audit import AuditEntry, AuditEvent
from runtime.audit.logger import JsonlAuditLogger


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> None:
    monkeypatch.setattr(sys, "argv", ["telegram-mcp", *argv])
    main()


class TestValidate:
    def test_valid_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        p = tmp_path / "telegram-mcp.yaml"
        p.write_text(yaml.dump({"telegram": {"api_id": 7, "api_hash": "h"}}))
        _run(monkeypatch, "validate", str(p))
        out = capsys.readouterr().out
        assert "Config OK: telegram v1.0.0" in out
        assert "API ID:        7" in out

    def test_missing_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, "validate", str(tmp_path / "nope.yaml"))
        assert exc_info.value.code == 1
        assert "config not found" in capsys.readouterr().err


class TestTools:
    def test_lists_catalog(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _run(monkeypatch, "tools")
        out = capsys.readouterr().out
        assert "telegram_send_message" in out
        assert "29 tools" in out

    def test_openai_format(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _run(monkeypatch, "tools", "--openai")
        defs = json.loads(capsys.readouterr().out)
        assert len(defs) == 29
        assert defs[0]["type"] == "function"
        assert defs[0]["function"]["parameters"]["type"] == "object"


class TestLogs:
    def test_filters(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        log_file = tmp_path / "audit.jsonl"
        logger = JsonlAuditLogger(log_file)
        logger.log(AuditEntry(request_id="r1", event=AuditEvent.TOOL_CALL, detail={"tool": "telegram_get_me"}))
        logger.log(AuditEntry(request_id="r2", event=AuditEvent.TOOL_ERROR, detail={"tool": "telegram_get_chat"}))

        _run(monkeypatch, "logs", str(log_file), "--event", "tool.error", "--json")
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["request_id"] == "r2"

        _run(monkeypatch, "logs", str(log_file), "--tool", "telegram_get_me")
        assert "r1" in capsys.readouterr().out

    def test_unknown_event(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        log_file = tmp_path / "audit.jsonl"
        JsonlAuditLogger(log_file).log(AuditEntry(request_id="r", event=AuditEvent.SERVER_START))
        with pytest.raises(SystemExit):
            _run(monkeypatch, "logs", str(log_file), "--event", "bogus")
        assert "Valid events" in capsys.readouterr().err
