"""Tests for the command-line entry point."""

from __future__ import annotations

import io
from pathlib import Path
from typing import List

import pytest

import fetch_app
from fakes import DummyResponse, DummySession, listing_html

STORE_URL = "https://apps.microsoft.com/detail/9NKSQGP7F2NH"


@pytest.fixture
def session(monkeypatch: pytest.MonkeyPatch) -> DummySession:
    rows = [("App_neutral.msixbundle", "http://dl/app", "2099", "f" * 40)]
    dummy = DummySession(
        {"http://dl/app": DummyResponse(content=b"bundle")},
        post_response=DummyResponse(text=listing_html(rows)),
    )
    monkeypatch.setattr(fetch_app, "build_session", lambda: dummy)
    monkeypatch.setattr(fetch_app, "detect_arch", lambda: "x64")
    monkeypatch.setattr(fetch_app.time, "sleep", lambda seconds: None)
    return dummy


def test_main_prompts_for_url_and_finishes(
    session: DummySession,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    prompts: List[str] = []

    def _fake_input(prompt: str) -> str:
        prompts.append(prompt)
        return STORE_URL

    monkeypatch.setattr("builtins.input", _fake_input)

    code = fetch_app.main(["--dry-run", "--download-dir", str(tmp_path)])

    assert code == 0
    assert prompts == ["Enter Microsoft Store app URL: "]
    assert (tmp_path / "App_neutral.msixbundle").read_bytes() == b"bundle"
    out = capsys.readouterr().out
    assert "Detected architecture: x64" in out
    assert out.rstrip().endswith("Finish")


def test_main_rejects_invalid_url(
    session: DummySession, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = fetch_app.main(["--dry-run", "--url", "not-a-store-link",
                           "--download-dir", str(tmp_path)])

    assert code == 1
    assert session.post_calls == []
    assert "Invalid URL" in capsys.readouterr().out


def test_main_refuses_to_install_off_windows(
    session: DummySession, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("installer.platform.system", lambda: "Linux")

    code = fetch_app.main(["--url", STORE_URL])

    assert code == 1
    assert session.post_calls == []
    assert "requires Windows" in capsys.readouterr().out


def test_main_treats_closed_stdin_as_invalid_url(
    session: DummySession, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    code = fetch_app.main(["--dry-run"])

    assert code == 1
    assert session.post_calls == []
    assert "Invalid URL" in capsys.readouterr().out


def test_main_checks_url_before_platform(
    session: DummySession, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """A bad link is reported as such even where installing is unsupported."""
    monkeypatch.setattr("installer.platform.system", lambda: "Linux")

    code = fetch_app.main(["--url", "not-a-store-link"])

    assert code == 1
    out = capsys.readouterr().out
    assert "Invalid URL" in out
    assert "requires Windows" not in out
