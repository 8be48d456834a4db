"""Subprocess adapter for the plumage image generator."""

import subprocess
from pathlib import Path

from plumage_batch.domain.exceptions import GenerationError
from plumage_batch.shared.logging import get_logger

logger = get_logger(__name__)


class PlumageProducer:
    """
    Runs ``plumage <stem>`` for one image.

    plumage writes ``<stem>.bmp`` and a ``<stem>.params`` sidecar, reading
    shared parameters from ``./params`` when present. The sidecar is left
    in place so any image can be regenerated from it.
    """

    def __init__(self, executable: Path, intermediate_ext: str = "bmp"):
        self.executable = Path(executable)
        self.intermediate_ext = intermediate_ext
        self._logger = get_logger(__name__)

    def generate(self, stem: Path) -> Path:
        """
        Generate one image.

        Args:
            stem: Output path without extension

        Returns:
            Path of the intermediate image

        Raises:
            GenerationError: If the producer fails or writes nothing
        """
        output = stem.with_name(f"{stem.name}.{self.intermediate_ext}")
        cmd = [str(self.executable), str(stem)]
        self._logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True
            )
        except subprocess.CalledProcessError as e:
            raise GenerationError(
                f"{self.executable.name} exited with {e.returncode}: {(e.stderr or '').strip()}"
            )
        except OSError as e:
            raise GenerationError(f"Failed to run {self.executable}: {e}")

        if result.stdout.strip():
            self._logger.debug(result.stdout.strip())

        if not output.exists():
            raise GenerationError(f"Producer did not create {output}")

        return output
