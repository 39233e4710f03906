"""Mixing frames or scalar types is rejected by the static type checker."""
import re
from pathlib import Path

import pytest

mypy_api = pytest.importorskip("mypy.api")

PROJECT_ROOT = Path(__file__).resolve().parents[1]

SNIPPET = """\
import numpy as np
from trackview.core import CameraLocal, FrameVector, PointRotation, World, transform

a: FrameVector[np.float32, World] = FrameVector(1.0, 0.0, 0.0, frame=World, dtype=np.float32)
b: FrameVector[np.float32, CameraLocal] = FrameVector(0.0, 1.0, 0.0, frame=CameraLocal, dtype=np.float32)
c: FrameVector[np.float64, World] = FrameVector(0.0, 1.0, 0.0, frame=World, dtype=np.float64)
r: PointRotation[np.float32, World] = PointRotation(np.float32(0.0), a)

same_frame = a.add(a)
same_frame_rotation = transform(r, a)
other_frame = a.add(b)
other_dtype = a.add(c)
rotation_other_frame = transform(r, b)
rotation_other_dtype = transform(r, c)
"""

GOOD_LINES = {9, 10}
BAD_LINES = {11, 12, 13, 14}


@pytest.fixture
def error_lines(tmp_path, monkeypatch):
    snippet = tmp_path / "frames_snippet.py"
    snippet.write_text(SNIPPET, encoding="utf-8")
    monkeypatch.chdir(PROJECT_ROOT)
    monkeypatch.setenv("MYPYPATH", str(PROJECT_ROOT))

    stdout, _stderr, _status = mypy_api.run([
        "--follow-imports=silent",
        "--ignore-missing-imports",
        "--no-error-summary",
        "--cache-dir", str(tmp_path / "mypy_cache"),
        str(snippet),
    ])
    lines = set()
    for line in stdout.splitlines():
        m = re.search(r"frames_snippet\.py:(\d+)(?::\d+)?: error:", line)
        if m:
            lines.add(int(m.group(1)))
    return lines


def test_mismatched_frames_and_scalar_types_are_type_errors(error_lines):
    assert BAD_LINES <= error_lines


def test_matching_frames_type_check(error_lines):
    assert not (GOOD_LINES & error_lines)
