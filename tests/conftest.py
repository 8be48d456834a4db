import sys
import os
from pathlib import Path

import pytest

# Ensure src/ is on sys.path so 'plumage_batch' is importable without install
SRC = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from plumage_batch.domain.exceptions import GenerationError, ConversionError


class FakeProducer:
    """Writes a placeholder intermediate file; fails on the listed stems."""

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = []

    def generate(self, stem: Path) -> Path:
        self.calls.append(stem.name)
        if stem.name in self.fail_on:
            raise GenerationError(f"simulated failure for {stem.name}")
        output = stem.with_name(f"{stem.name}.bmp")
        output.write_bytes(b"BM")
        stem.with_name(f"{stem.name}.params").write_text("seed = 0\n")
        return output


class FakeConverter:
    """Copies the intermediate bytes to the destination."""

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.calls = []

    def convert(self, source: Path, destination: Path) -> Path:
        self.calls.append((source.name, destination.name))
        if source.stem in self.fail_on:
            raise ConversionError(f"simulated conversion failure for {source.name}")
        destination.write_bytes(source.read_bytes())
        return destination


class LineCollector:
    """Collects emitted identifiers instead of printing them."""

    def __init__(self):
        self.lines = []

    def __call__(self, identifier: str) -> None:
        self.lines.append(identifier)


@pytest.fixture
def producer():
    return FakeProducer()


@pytest.fixture
def converter():
    return FakeConverter()


@pytest.fixture
def lines():
    return LineCollector()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove batch-related environment variables for the test.

    Setting before deleting makes monkeypatch restore the original state,
    which also undoes values loaded from a .env file during the test.
    """
    for name in ("PARALLEL", "BATCH_OUTPUT_DIR", "BATCH_COUNT", "PLUMAGE_PRODUCER",
                 "BATCH_CONVERTER", "BATCH_ON_ERROR"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def make_producer():
    return FakeProducer


@pytest.fixture
def make_converter():
    return FakeConverter
