"""Shared fixtures: listening renders go to audio/test_signals/."""

import os

import numpy as np
import pytest
from scipy.io import wavfile

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
OUTPUT_DIR = os.path.join(ROOT, "audio", "test_signals")


@pytest.fixture
def save_wav():
    """Write a peak-normalized 16-bit render; returns the path."""
    from tapline.params import SR

    def _save(filename, audio, sr=SR):
        os.makedirs(OUTPUT_DIR, exist_ok=True)
        path = os.path.join(OUTPUT_DIR, filename)
        audio = np.asarray(audio, dtype=np.float64)
        peak = np.max(np.abs(audio))
        if peak > 0:
            audio = audio / peak * 0.9
        wavfile.write(path, sr, np.round(audio * 32767).astype(np.int16))
        print(f"  rendered {filename}: {len(audio) / sr:.2f}s")
        return path

    return _save
