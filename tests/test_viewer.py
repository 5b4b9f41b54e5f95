from __future__ import annotations

from pathlib import Path

import pytest

from labelgood.adapters import viewer as viewer_mod
from labelgood.adapters.viewer import ViewerDispatcher
from labelgood.core.exceptions import ArtifactMissingError, DispatchFailedError


def _pdf(tmp_path: Path) -> Path:
    path = tmp_path / "label_1.pdf"
    path.write_bytes(b"%PDF-1.4\n")
    return path


def test_view_opens_pdf_and_returns_path(tmp_path: Path) -> None:
    opened: list[str] = []

    def opener(target: str) -> int:
        opened.append(target)
        return 0

    pdf = _pdf(tmp_path)
    assert ViewerDispatcher(opener=opener).view(pdf) == str(pdf)
    assert opened == [str(pdf)]


def test_view_uses_click_launch_by_default(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    launched: list[str] = []

    def fake_launch(target: str) -> int:
        launched.append(target)
        return 0

    monkeypatch.setattr(viewer_mod.click, "launch", fake_launch)
    pdf = _pdf(tmp_path)

    ViewerDispatcher().view(pdf)

    assert launched == [str(pdf)]


def test_view_rejects_missing_file(tmp_path: Path) -> None:
    opened: list[str] = []
    with pytest.raises(ArtifactMissingError):
        ViewerDispatcher(opener=lambda target: opened.append(target) or 0).view(
            tmp_path / "absent.pdf"
        )
    assert opened == []


def test_view_reports_opener_failures(tmp_path: Path) -> None:
    pdf = _pdf(tmp_path)

    with pytest.raises(DispatchFailedError, match="status 3"):
        ViewerDispatcher(opener=lambda _target: 3).view(pdf)

    def broken(_target: str) -> int:
        raise OSError("xdg-open: no method available")

    with pytest.raises(DispatchFailedError, match="xdg-open"):
        ViewerDispatcher(opener=broken).view(pdf)
