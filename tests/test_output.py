from __future__ import annotations

from pathlib import Path
import tempfile

from labelgood.adapters.output import allocate_output_path


def test_output_path_uses_epoch_milliseconds(tmp_path: Path) -> None:
    path = allocate_output_path(tmp_path, clock=lambda: 1700000000.5)

    assert path == tmp_path / "label_1700000000500.pdf"
    assert not path.exists()


def test_output_path_defaults_to_system_tempdir() -> None:
    path = allocate_output_path(clock=lambda: 1.0)
    assert path.parent == Path(tempfile.gettempdir())
    assert path.name == "label_1000.pdf"


def test_output_path_honours_prefix_and_creates_directory(tmp_path: Path) -> None:
    target = tmp_path / "spool" / "labels"

    path = allocate_output_path(target, prefix="shipping_", clock=lambda: 2.25)

    assert target.is_dir()
    assert path.name == "shipping_2250.pdf"


def test_successive_calls_advance_with_the_clock(tmp_path: Path) -> None:
    ticks = iter([10.0, 10.5])
    first = allocate_output_path(tmp_path, clock=lambda: next(ticks))
    second = allocate_output_path(tmp_path, clock=lambda: next(ticks))
    assert first != second
