from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.support.cluster import FakeCluster, RecordingClassifier

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture
def fake_cluster() -> FakeCluster:
    return FakeCluster()


@pytest.fixture
def classifier() -> RecordingClassifier:
    return RecordingClassifier()


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "target"


@pytest.fixture
def write_manifest(output_dir: Path) -> Callable[[str, str], Path]:
    def write(platform: str, content: str) -> Path:
        path = output_dir / "kubernetes" / f"{platform}.yml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return write
