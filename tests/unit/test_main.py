# tests/unit/test_main.py — v1
"""Tests for main.py — CLI entry point."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from resumeai.main import _build_parser, main


@pytest.fixture(autouse=True)
def _isolate(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    yield
    logging.getLogger("resumeai").handlers.clear()


# ---------------------------------------------------------------------------
# Parser tests
# ---------------------------------------------------------------------------

class TestBuildParser:
    def test_version_flag(self):
        parser = _build_parser()
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(["--version"])
        assert exc_info.value.code == 0

    def test_analyze_subcommand(self):
        args = _build_parser().parse_args(["analyze", "cv.txt", "-r", "jd.txt", "-u", "u7"])
        assert args.command == "analyze"
        assert args.file == Path("cv.txt")
        assert args.reference == Path("jd.txt")
        assert args.user == "u7"

    def test_analyze_defaults(self):
        args = _build_parser().parse_args(["analyze", "cv.txt"])
        assert args.reference is None
        assert args.user == "cli"

    def test_status_subcommand(self):
        assert _build_parser().parse_args(["status"]).command == "status"


# ---------------------------------------------------------------------------
# Command tests
# ---------------------------------------------------------------------------

class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_analyze(self, tmp_path, capsys, fake_client, resume_text):
        cv = tmp_path / "cv.txt"
        cv.write_text(resume_text, encoding="utf-8")
        with patch(
            "resumeai.llm.client_factory.create_default_client", return_value=fake_client
        ):
            assert main(["analyze", str(cv)]) == 0
        assert '"Overall_Resume_Score": 82' in capsys.readouterr().out
        assert len(fake_client.calls) == 1

    def test_analyze_with_reference(self, tmp_path, fake_client, resume_text, job_description):
        cv = tmp_path / "cv.txt"
        jd = tmp_path / "jd.txt"
        cv.write_text(resume_text, encoding="utf-8")
        jd.write_text(job_description, encoding="utf-8")
        with patch(
            "resumeai.llm.client_factory.create_default_client", return_value=fake_client
        ):
            assert main(["analyze", str(cv), "--reference", str(jd)]) == 0
        prompt, _ = fake_client.calls[0]
        assert job_description in prompt

    def test_analyze_missing_file(self, capsys):
        assert main(["analyze", "missing.txt"]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_analyze_invalid_input(self, tmp_path, capsys, fake_client):
        cv = tmp_path / "cv.txt"
        cv.write_text("too short", encoding="utf-8")
        with patch(
            "resumeai.llm.client_factory.create_default_client", return_value=fake_client
        ):
            assert main(["analyze", str(cv)]) == 1
        assert "[400 INVALID_INPUT]" in capsys.readouterr().err
        assert fake_client.calls == []

    def test_status(self, capsys, fake_client):
        with patch(
            "resumeai.llm.client_factory.create_default_client", return_value=fake_client
        ):
            assert main(["-v", "status"]) == 0
        out = capsys.readouterr().out
        payload = json.loads(out[out.index("{"):out.rindex("}") + 1])
        assert payload["provider"] == "fake"
        assert payload["cache_size"] == 0
