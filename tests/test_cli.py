"""CLI parser and command behaviour tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

import kado_ai.llm.client as client_module
import kado_ai.pipeline as pipeline_module
from kado_ai.cli import _build_parser, main
from tests._fixtures.iac_builder import IacBuilder
from tests._fixtures.transport import RecordingTransport


def _write_settings(tmp_path: Path, backend: str = "anthropic_messages") -> Path:
    path = tmp_path / ".kdconfig"
    path.write_text(
        f"AI_API_KEY=test-api-key\nAI_MODEL=test-model\nAI_CLIENT={backend}\n",
        encoding="utf-8",
    )
    return path


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "analyze"])
    assert args.verbose is True
    assert args.command == "analyze"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["redact", "main.tf", "--verbose"])
    assert args.verbose is True
    assert args.command == "redact"
    assert args.file == Path("main.tf")


def test_cli_accepts_analyze_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(["analyze", "infra", "--config", "settings", "--dry-run"])
    assert args.path == "infra"
    assert args.config == Path("settings")
    assert args.dry_run is True


def test_cli_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args([])


def test_redact_prints_redacted_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "main.tf"
    target.write_text('password = "s3cr3t"\nendpoint = "10.2.3.4"\n', encoding="utf-8")

    main(["redact", str(target)])

    out = capsys.readouterr().out
    assert out == 'password = [REDACTED]\nendpoint = "[REDACTED]"\n'


def test_redact_reports_unreadable_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["redact", str(tmp_path / "missing.tf")])

    assert excinfo.value.code == 1
    assert "cannot read" in capsys.readouterr().err


def test_analyze_dry_run_writes_prompt_only(
    iac_builder: IacBuilder,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    iac_builder.terraform("main.tf", 'token = "abc"\n')
    transport = RecordingTransport()
    monkeypatch.setattr(client_module, "urllib_transport", transport)

    main(["analyze", str(iac_builder.path()), "--dry-run"])

    assert "token = [REDACTED]" in iac_builder.read_prompt()
    assert "(dry-run)" in capsys.readouterr().out
    assert transport.requests == []


def test_analyze_prints_recommendation(
    iac_builder: IacBuilder,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    iac_builder.terraform("main.tf", "resource {}\n")
    transport = RecordingTransport()
    monkeypatch.setattr(client_module, "urllib_transport", transport)
    monkeypatch.setattr(pipeline_module, "terminal_confirmation", lambda path: "yes")

    main(["analyze", str(iac_builder.path()), "--config", str(_write_settings(tmp_path))])

    assert capsys.readouterr().out.strip() == "Use remote state."
    assert len(transport.requests) == 1


def test_analyze_exits_on_cancellation(
    iac_builder: IacBuilder,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    transport = RecordingTransport()
    monkeypatch.setattr(client_module, "urllib_transport", transport)
    monkeypatch.setattr(pipeline_module, "terminal_confirmation", lambda path: "no")

    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(iac_builder.path()), "--config", str(_write_settings(tmp_path))])

    assert excinfo.value.code == 1
    assert "Operation cancelled by user" in capsys.readouterr().err
    assert transport.requests == []


def test_analyze_reports_missing_settings(
    iac_builder: IacBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(iac_builder.path()), "--config", str(tmp_path / "absent")])

    assert excinfo.value.code == 1
    assert "failed to load config" in capsys.readouterr().err


def test_analyze_reports_unsupported_backend(
    iac_builder: IacBuilder,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    transport = RecordingTransport()
    monkeypatch.setattr(client_module, "urllib_transport", transport)
    monkeypatch.setattr(pipeline_module, "terminal_confirmation", lambda path: "yes")
    settings = _write_settings(tmp_path, backend="gemini")

    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(iac_builder.path()), "--config", str(settings)])

    assert excinfo.value.code == 1
    assert "unsupported backend: gemini" in capsys.readouterr().err
    assert transport.requests == []


def test_log_file_receives_scrubbed_records(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "vars.yml"
    target.write_text("db_password: hunter2\n", encoding="utf-8")
    log_file = tmp_path / "kado.log"

    main(["--log-file", str(log_file), "redact", str(target)])

    logging.getLogger("kado_ai").handlers[-1].flush()
    written = log_file.read_text(encoding="utf-8")
    assert "Redacted 1 sensitive values" in written
    assert "hunter2" not in written
