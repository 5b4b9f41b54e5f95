from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from labelgood.adapters.cups import PrintDispatcher, PrinterEnumerator
from labelgood.adapters.runner import CommandResult
from labelgood.core.exceptions import (
    ArtifactMissingError,
    DispatchFailedError,
    LabelValidationError,
    ProgramNotFoundError,
)
from labelgood.core.units import MediaUnit


class _StubRunner:
    def __init__(self, result: CommandResult | None = None, *, missing: bool = False) -> None:
        self.result = result or CommandResult(0)
        self.missing = missing
        self.calls: list[tuple[str, list[str]]] = []

    def run(self, program: str, args: Sequence[str]) -> CommandResult:
        self.calls.append((program, list(args)))
        if self.missing:
            raise ProgramNotFoundError(program)
        return self.result


def _pdf(tmp_path: Path) -> Path:
    path = tmp_path / "label_1700000000000.pdf"
    path.write_bytes(b"%PDF-1.4\n")
    return path


def test_print_pdf_builds_lpr_command(tmp_path: Path) -> None:
    runner = _StubRunner()
    pdf = _pdf(tmp_path)

    message = PrintDispatcher(runner=runner).print_pdf(pdf, "BrotherQL", 62, 100)

    assert message == "Printed to BrotherQL"
    assert runner.calls == [
        (
            "lpr",
            [
                "-P",
                "BrotherQL",
                "-o",
                "PageSize=Custom.620x1000",
                "-o",
                "fit-to-page=false",
                "-o",
                "scaling=100",
                "-o",
                "print-scaling=none",
                str(pdf),
            ],
        )
    ]


def test_point_based_renderers_describe_page_in_points(tmp_path: Path) -> None:
    runner = _StubRunner()

    PrintDispatcher(runner=runner).print_pdf(
        _pdf(tmp_path), "BrotherQL", 62, 100, MediaUnit.POINTS
    )

    _, args = runner.calls[0]
    assert args[3] == "PageSize=Custom.175.7483x283.465"


def test_extra_options_follow_scaling_options(tmp_path: Path) -> None:
    runner = _StubRunner()
    pdf = _pdf(tmp_path)

    PrintDispatcher(
        runner=runner,
        program="/usr/local/bin/lpr",
        extra_options={"media": "Roll", "Darkness": "5"},
    ).print_pdf(pdf, "Zebra", 100, 50)

    program, args = runner.calls[0]
    assert program == "/usr/local/bin/lpr"
    assert args[-5:] == ["-o", "media=Roll", "-o", "Darkness=5", str(pdf)]


def test_missing_pdf_is_reported_before_spooling(tmp_path: Path) -> None:
    runner = _StubRunner()
    missing = tmp_path / "label_0.pdf"

    with pytest.raises(ArtifactMissingError) as excinfo:
        PrintDispatcher(runner=runner).print_pdf(missing, "BrotherQL", 62, 100)

    assert str(excinfo.value) == f"PDF file does not exist at: {missing}"
    assert runner.calls == []


def test_empty_printer_name_is_rejected(tmp_path: Path) -> None:
    runner = _StubRunner()
    with pytest.raises(LabelValidationError):
        PrintDispatcher(runner=runner).print_pdf(_pdf(tmp_path), "  ", 62, 100)
    assert runner.calls == []


def test_spool_failure_carries_stderr_verbatim(tmp_path: Path) -> None:
    stderr = "lpr: The printer or class does not exist."
    runner = _StubRunner(CommandResult(1, stderr=stderr))

    with pytest.raises(DispatchFailedError) as excinfo:
        PrintDispatcher(runner=runner).print_pdf(_pdf(tmp_path), "Nope", 62, 100)

    assert str(excinfo.value) == f"Failed to print: {stderr}"


def test_missing_lpr_is_a_dispatch_failure(tmp_path: Path) -> None:
    runner = _StubRunner(missing=True)

    with pytest.raises(DispatchFailedError, match="Failed to execute lpr command"):
        PrintDispatcher(runner=runner).print_pdf(_pdf(tmp_path), "BrotherQL", 62, 100)


def test_list_printers_parses_lpstat_output() -> None:
    runner = _StubRunner(CommandResult(0, stdout="BrotherQL\n\n  Zebra_ZD420 \nOffice\n"))

    assert PrinterEnumerator(runner=runner).list_printers() == [
        "BrotherQL",
        "Zebra_ZD420",
        "Office",
    ]
    assert runner.calls == [("lpstat", ["-e"])]


def test_list_printers_returns_empty_list() -> None:
    runner = _StubRunner(CommandResult(0, stdout=""))
    assert PrinterEnumerator(runner=runner).list_printers() == []


def test_list_printers_reports_lpstat_failure() -> None:
    runner = _StubRunner(CommandResult(1, stderr="lpstat: Bad file descriptor"))

    with pytest.raises(DispatchFailedError) as excinfo:
        PrinterEnumerator(runner=runner).list_printers()

    assert str(excinfo.value) == "Failed to get printer list: lpstat: Bad file descriptor"


def test_list_printers_without_lpstat() -> None:
    with pytest.raises(DispatchFailedError, match="lpstat"):
        PrinterEnumerator(runner=_StubRunner(missing=True)).list_printers()
