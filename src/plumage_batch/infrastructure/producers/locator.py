"""Locating the plumage executable."""

import os
import shutil
from pathlib import Path
from typing import List, Optional

from plumage_batch.domain.exceptions import ProducerNotFoundError
from plumage_batch.shared.logging import get_logger

logger = get_logger(__name__)


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


class ProducerLocator:
    """
    Resolves the producer binary once per run.

    Lookup order:
    1. Explicit path (config or PLUMAGE_PRODUCER)
    2. Local build output, so development builds win
    3. ``program_name`` on PATH
    """

    def __init__(
        self,
        program_name: str = "plumage",
        local_build_path: Path = Path("target/release/plumage"),
        explicit_path: Optional[Path] = None,
        search_path: Optional[str] = None
    ):
        """
        Args:
            program_name: Executable name searched on PATH
            local_build_path: Build output checked before PATH
            explicit_path: Path that must be used when given
            search_path: PATH override (defaults to the process PATH)
        """
        self.program_name = program_name
        self.local_build_path = Path(local_build_path)
        self.explicit_path = Path(explicit_path) if explicit_path else None
        self.search_path = search_path
        self._logger = get_logger(__name__)

    def locate(self) -> Path:
        """
        Return the executable to run.

        Raises:
            ProducerNotFoundError: If no candidate is an executable file
        """
        searched: List[str] = []

        if self.explicit_path is not None:
            if _is_executable(self.explicit_path):
                self._logger.info(f"Using producer: {self.explicit_path}")
                return self.explicit_path
            # An explicit path is never silently replaced by another binary
            raise ProducerNotFoundError(
                f"Configured producer is not an executable file: {self.explicit_path}"
            )

        searched.append(str(self.local_build_path))
        if _is_executable(self.local_build_path):
            self._logger.info(f"Using local build: {self.local_build_path}")
            return self.local_build_path

        searched.append(f"$PATH ({self.program_name})")
        found = shutil.which(self.program_name, path=self.search_path)
        if found:
            self._logger.info(f"Using producer from PATH: {found}")
            return Path(found)

        raise ProducerNotFoundError(
            f"Could not find `{self.program_name}`. Searched: {', '.join(searched)}"
        )
