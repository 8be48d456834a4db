"""ImageMagick wrapper for format conversion."""

import shlex
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from plumage_batch.domain.exceptions import ConversionError
from plumage_batch.shared.logging import get_logger

logger = get_logger(__name__)


class ImageMagickConverter:
    """Runs ``<converter> <source> <destination>``."""

    def __init__(self, command: str = "convert"):
        """
        Args:
            command: Converter command line; may carry extra arguments
                     (e.g. ``"magick convert"``)
        """
        self.command: List[str] = shlex.split(command)
        self._logger = get_logger(__name__)

    @classmethod
    def is_available(cls, command: str = "convert", search_path: Optional[str] = None) -> bool:
        """Check if the converter executable can be found."""
        parts = shlex.split(command)
        if not parts:
            return False
        return shutil.which(parts[0], path=search_path) is not None

    def convert(self, source: Path, destination: Path) -> Path:
        """
        Transcode ``source`` to ``destination``.

        Existing destination files are overwritten.

        Raises:
            ConversionError: If the converter fails
        """
        cmd = [*self.command, str(source), str(destination)]
        self._logger.debug(f"Running: {' '.join(cmd)}")

        try:
            subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True
            )
        except subprocess.CalledProcessError as e:
            raise ConversionError(
                f"{self.command[0]} exited with {e.returncode}: {(e.stderr or '').strip()}"
            )
        except OSError as e:
            raise ConversionError(f"Failed to run {self.command[0]}: {e}")

        if not destination.exists():
            raise ConversionError(f"Converter did not create {destination}")

        return destination
