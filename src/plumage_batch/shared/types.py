"""Common type definitions."""

from typing import Callable

# Receives one completed item identifier per call
LineEmitter = Callable[[str], None]
