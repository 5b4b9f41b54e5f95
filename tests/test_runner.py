from __future__ import annotations

from typing import Any

import pytest

from labelgood.adapters import runner as runner_mod
from labelgood.adapters.runner import CommandResult, CommandRunner, SubprocessRunner
from labelgood.core.exceptions import ProgramNotFoundError


class _StubCompleted:
    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def test_run_resolves_program_and_captures_output(monkeypatch: pytest.MonkeyPatch) -> None:
    recorded: dict[str, Any] = {}

    monkeypatch.setattr(runner_mod.shutil, "which", lambda name, path=None: f"/usr/bin/{name}")

    def fake_run(cmd: list[str], **kwargs: Any) -> _StubCompleted:
        recorded["command"] = cmd
        recorded["kwargs"] = kwargs
        return _StubCompleted(0, stdout="Loading pages (1/6)\n", stderr="")

    monkeypatch.setattr(runner_mod.subprocess, "run", fake_run)

    result = SubprocessRunner().run("wkhtmltopdf", ["in.html", "out.pdf"])

    assert recorded["command"] == ["/usr/bin/wkhtmltopdf", "in.html", "out.pdf"]
    assert recorded["kwargs"]["capture_output"] is True
    assert recorded["kwargs"]["text"] is True
    assert recorded["kwargs"]["check"] is False
    assert result == CommandResult(0, stdout="Loading pages (1/6)\n", stderr="")
    assert result.ok is True


def test_missing_program_raises_not_found(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(runner_mod.shutil, "which", lambda name, path=None: None)

    def fail_run(*_args: Any, **_kwargs: Any) -> None:
        raise AssertionError("subprocess.run must not be called")

    monkeypatch.setattr(runner_mod.subprocess, "run", fail_run)

    with pytest.raises(ProgramNotFoundError) as excinfo:
        SubprocessRunner().run("weasyprint", [])

    assert excinfo.value.program == "weasyprint"
    assert "not installed" in str(excinfo.value)


def test_vanished_executable_is_treated_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(runner_mod.shutil, "which", lambda name, path=None: "/opt/magick")

    def vanish(*_args: Any, **_kwargs: Any) -> None:
        raise FileNotFoundError(2, "No such file or directory")

    monkeypatch.setattr(runner_mod.subprocess, "run", vanish)

    with pytest.raises(ProgramNotFoundError):
        SubprocessRunner().run("magick", [])


def test_exec_failure_maps_to_status_126(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(runner_mod.shutil, "which", lambda name, path=None: "/opt/lpr")

    def broken(*_args: Any, **_kwargs: Any) -> None:
        raise OSError(8, "Exec format error")

    monkeypatch.setattr(runner_mod.subprocess, "run", broken)

    result = SubprocessRunner().run("lpr", [])

    assert result.returncode == 126
    assert "Exec format error" in result.detail


def test_lookup_results_are_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    lookups: list[str] = []

    def fake_which(name: str, path: str | None = None) -> str:
        lookups.append(name)
        return f"/usr/bin/{name}"

    monkeypatch.setattr(runner_mod.shutil, "which", fake_which)
    runner = SubprocessRunner()

    runner.resolve("lpstat")
    runner.resolve("lpstat")
    assert lookups == ["lpstat"]

    runner.reset()
    runner.resolve("lpstat")
    assert lookups == ["lpstat", "lpstat"]


def test_command_result_detail_prefers_stderr() -> None:
    assert CommandResult(1, stdout="out", stderr=" err \n").detail == "err"
    assert CommandResult(1, stdout=" out ").detail == "out"
    assert CommandResult(0).detail == ""


def test_subprocess_runner_satisfies_protocol() -> None:
    assert isinstance(SubprocessRunner(), CommandRunner)


def test_non_executable_program_is_rejected_not_missing(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(runner_mod.shutil, "which", lambda name, path=None: "/opt/bin/magick")

    def denied(*_args: Any, **_kwargs: Any) -> None:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(runner_mod.subprocess, "run", denied)

    result = SubprocessRunner().run("magick", [])

    assert result.returncode == 126
    assert "Permission denied" in result.detail
