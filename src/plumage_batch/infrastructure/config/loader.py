"""Configuration loading and validation."""

import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass, fields

from plumage_batch.domain.exceptions import ConfigurationError
from plumage_batch.domain.models import BatchRequest, FailurePolicy
from plumage_batch.shared.logging import get_logger

logger = get_logger(__name__)


@dataclass
class BatchConfig:
    """Configuration for a batch run."""

    # Output
    output_dir: Path
    count: int
    file_prefix: str = "out"
    intermediate_ext: str = "bmp"
    final_ext: str = "png"

    # Workers (None = detected processor count)
    parallelism: Optional[int] = None
    on_error: str = "continue"  # 'continue', 'abort'

    # Producer lookup
    producer_name: str = "plumage"
    local_build_path: Path = Path("target/release/plumage")
    producer_path: Optional[Path] = None

    # Converter
    converter: str = "convert"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.output_dir = Path(self.output_dir)
        self.local_build_path = Path(self.local_build_path)
        if self.producer_path is not None:
            self.producer_path = Path(self.producer_path)
        self._validate()

    def _validate(self):
        """Validate configuration values."""
        if not isinstance(self.count, int) or isinstance(self.count, bool):
            raise ConfigurationError(f"Count must be an integer, got: {self.count!r}")

        if self.count < 1:
            raise ConfigurationError(f"Count must be at least 1, got: {self.count}")

        if self.parallelism is not None:
            if not isinstance(self.parallelism, int) or isinstance(self.parallelism, bool):
                raise ConfigurationError(f"Parallelism must be an integer, got: {self.parallelism!r}")
            if self.parallelism < 1:
                raise ConfigurationError(f"Parallelism must be at least 1, got: {self.parallelism}")

        if self.on_error not in ("continue", "abort"):
            raise ConfigurationError(f"Invalid on_error: {self.on_error}")

        if not self.converter:
            raise ConfigurationError("Converter command must not be empty")

        if self.intermediate_ext == self.final_ext:
            raise ConfigurationError(
                f"Intermediate and final extensions must differ, got: {self.final_ext}"
            )

    def resolve_parallelism(self) -> int:
        """Explicit parallelism, else the detected processor count."""
        if self.parallelism is not None:
            return self.parallelism
        return os.cpu_count() or 1

    def to_request(self) -> BatchRequest:
        """Build the immutable request handed to the orchestrator."""
        return BatchRequest(
            output_dir=self.output_dir,
            count=self.count,
            parallelism=self.resolve_parallelism(),
            policy=FailurePolicy(self.on_error),
        )


class ConfigLoader:
    """Loads and validates configuration from YAML files and environment variables."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config loader.

        Args:
            config_path: Optional path to YAML config file; an explicit
                path must exist, the default batch.yaml may be absent
        """
        self._explicit = config_path is not None
        self.config_path = config_path or Path("batch.yaml")
        self._logger = get_logger(__name__)

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> BatchConfig:
        """
        Load configuration from file and environment.

        Precedence, lowest first: YAML file, environment, overrides.

        Returns:
            BatchConfig instance

        Raises:
            ConfigurationError: If configuration is invalid or incomplete
        """
        return self.build(self.load_partial(overrides))

    def build(self, config_dict: Dict[str, Any]) -> BatchConfig:
        """
        Validate a merged settings dict into a BatchConfig.

        Raises:
            ConfigurationError: If configuration is invalid or incomplete
        """
        missing = [name for name in ("output_dir", "count") if name not in config_dict]
        if missing:
            raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

        valid_fields = {f.name for f in fields(BatchConfig)}
        unknown = sorted(set(config_dict) - valid_fields)
        if unknown:
            self._logger.warning(f"Ignoring unknown settings: {', '.join(unknown)}")

        filtered_config = {k: v for k, v in config_dict.items() if k in valid_fields}

        try:
            return BatchConfig(**filtered_config)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

    def load_partial(self, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Merge file, environment and overrides without validating."""
        config_dict = self._load_from_file()
        config_dict.update(self._load_from_env())

        if overrides:
            for k, v in overrides.items():
                if v is None:
                    continue
                config_dict[k] = v

        return config_dict

    def _load_from_file(self) -> Dict[str, Any]:
        """Read the YAML file if it exists."""
        if not self.config_path.exists():
            if self._explicit:
                raise ConfigurationError(f"Config file not found: {self.config_path}")
            self._logger.debug(f"Config file not found: {self.config_path}")
            return {}

        self._logger.info(f"Loading config from {self.config_path}")
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}")

        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {self.config_path}")
        return dict(yaml_config)

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config = {}

        if output_dir := os.getenv("BATCH_OUTPUT_DIR"):
            env_config["output_dir"] = Path(output_dir)

        if count := os.getenv("BATCH_COUNT"):
            try:
                env_config["count"] = int(count)
            except ValueError:
                self._logger.warning(f"Invalid BATCH_COUNT value: {count}")

        if parallel := os.getenv("PARALLEL"):
            try:
                env_config["parallelism"] = int(parallel)
            except ValueError:
                self._logger.warning(f"Invalid PARALLEL value: {parallel}")

        if producer := os.getenv("PLUMAGE_PRODUCER"):
            env_config["producer_path"] = Path(producer)

        if converter := os.getenv("BATCH_CONVERTER"):
            env_config["converter"] = converter

        if on_error := os.getenv("BATCH_ON_ERROR"):
            env_config["on_error"] = on_error.lower()

        return env_config
