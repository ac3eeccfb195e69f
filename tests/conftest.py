"""Shared fixtures: small synthetic images and pathfiles on disk."""

from pathlib import Path

import cv2
import numpy as np
import pytest


@pytest.fixture
def gradient_image() -> np.ndarray:
    """96x128 grayscale image with a horizontal gradient and a bright square."""
    img = np.tile(np.linspace(0, 200, 128, dtype=np.uint8), (96, 1))
    img[30:60, 40:80] = 250
    return img


@pytest.fixture
def noisy_image() -> np.ndarray:
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, (80, 100), dtype=np.uint8)


@pytest.fixture
def make_pathfile(tmp_path):
    """Write grayscale PNGs into tmp_path/src and a pathfile listing them.

    Returns a factory: make_pathfile(names) -> (pathfile, [image paths]).
    """

    def factory(names, shape=(72, 90)):
        src_dir = tmp_path / "src"
        src_dir.mkdir(exist_ok=True)
        rng = np.random.default_rng(7)
        paths = []
        for name in names:
            path = src_dir / name
            pixels = rng.integers(0, 256, shape, dtype=np.uint8)
            assert cv2.imwrite(str(path), pixels)
            paths.append(path)
        pathfile = tmp_path / "paths.txt"
        pathfile.write_text("".join(f"{p}\n" for p in paths), encoding="utf-8")
        return pathfile, paths

    return factory


@pytest.fixture
def failing_imwrite(monkeypatch):
    """Make cv2.imwrite fail on its n-th call (1-based). Returns the call log."""
    real_imwrite = cv2.imwrite
    calls: list[Path] = []

    def install(fail_on: int):
        def fake_imwrite(path, img, *args):
            calls.append(Path(path))
            if len(calls) == fail_on:
                return False
            return real_imwrite(path, img, *args)

        monkeypatch.setattr(cv2, "imwrite", fake_imwrite)
        return calls

    return install
