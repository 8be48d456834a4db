"""Test configuration loader."""

import pytest
from pathlib import Path
from unittest import mock

from plumage_batch.domain.exceptions import ConfigurationError
from plumage_batch.domain.models import FailurePolicy
from plumage_batch.infrastructure.config import ConfigLoader, BatchConfig


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run from an empty directory so the default batch.yaml is absent."""
    monkeypatch.chdir(tmp_path)


def test_overrides_only(tmp_path, clean_env):
    """Test loading config from CLI overrides alone."""
    loader = ConfigLoader()
    config = loader.load(overrides={'output_dir': tmp_path / "out", 'count': 5})

    assert config.output_dir == tmp_path / "out"
    assert config.count == 5
    assert config.parallelism is None
    assert config.converter == "convert"
    assert config.on_error == "continue"


def test_config_loader_from_env(tmp_path, clean_env):
    """Test loading config from environment variables."""
    clean_env.setenv('BATCH_OUTPUT_DIR', str(tmp_path / "env-out"))
    clean_env.setenv('BATCH_COUNT', '12')
    clean_env.setenv('PARALLEL', '3')
    clean_env.setenv('BATCH_ON_ERROR', 'ABORT')
    clean_env.setenv('BATCH_CONVERTER', 'magick convert')

    config = ConfigLoader().load()

    assert config.output_dir == tmp_path / "env-out"
    assert config.count == 12
    assert config.parallelism == 3
    assert config.on_error == "abort"
    assert config.converter == "magick convert"


def test_yaml_then_env_then_overrides(tmp_path, clean_env):
    """Environment beats the file; overrides beat both."""
    config_file = tmp_path / "batch.yaml"
    config_file.write_text(
        "output_dir: from-yaml\n"
        "count: 50\n"
        "parallelism: 2\n"
        "file_prefix: img\n"
    )
    clean_env.setenv('PARALLEL', '6')

    config = ConfigLoader(config_path=config_file).load(overrides={'count': 7, 'parallelism': None})

    assert config.output_dir == Path("from-yaml")
    assert config.count == 7
    assert config.parallelism == 6
    assert config.file_prefix == "img"


def test_invalid_parallel_env_is_ignored(tmp_path, clean_env):
    clean_env.setenv('PARALLEL', 'lots')

    config = ConfigLoader().load(
        overrides={'output_dir': tmp_path, 'count': 1}
    )

    assert config.parallelism is None


def test_zero_parallel_is_rejected(tmp_path, clean_env):
    clean_env.setenv('PARALLEL', '0')

    with pytest.raises(ConfigurationError):
        ConfigLoader().load(
            overrides={'output_dir': tmp_path, 'count': 1}
        )


def test_missing_required_settings(tmp_path, clean_env):
    with pytest.raises(ConfigurationError, match="count"):
        ConfigLoader().load(overrides={'output_dir': tmp_path})


def test_unknown_keys_are_dropped(tmp_path, clean_env):
    config_file = tmp_path / "batch.yaml"
    config_file.write_text("output_dir: out\ncount: 3\ncolour: blue\n")

    config = ConfigLoader(config_path=config_file).load()

    assert not hasattr(config, 'colour')


def test_malformed_yaml(tmp_path, clean_env):
    config_file = tmp_path / "batch.yaml"
    config_file.write_text("output_dir: [unclosed\n")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_file).load()


def test_yaml_must_be_mapping(tmp_path, clean_env):
    config_file = tmp_path / "batch.yaml"
    config_file.write_text("- a\n- b\n")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_file).load()


class TestBatchConfig:
    """Test BatchConfig validation."""

    @pytest.mark.parametrize("count", [0, -3, "7", True])
    def test_invalid_count(self, count):
        with pytest.raises(ConfigurationError):
            BatchConfig(output_dir=Path("out"), count=count)

    def test_invalid_on_error(self):
        with pytest.raises(ConfigurationError):
            BatchConfig(output_dir=Path("out"), count=1, on_error="retry")

    def test_same_extensions_rejected(self):
        with pytest.raises(ConfigurationError):
            BatchConfig(output_dir=Path("out"), count=1, intermediate_ext="png", final_ext="png")

    def test_paths_are_normalised(self):
        config = BatchConfig(output_dir="out", count=1, producer_path="bin/plumage")

        assert config.output_dir == Path("out")
        assert config.producer_path == Path("bin/plumage")

    def test_parallelism_defaults_to_cpu_count(self):
        config = BatchConfig(output_dir=Path("out"), count=10)

        with mock.patch('plumage_batch.infrastructure.config.loader.os.cpu_count', return_value=12):
            assert config.resolve_parallelism() == 12

    def test_parallelism_falls_back_to_one(self):
        config = BatchConfig(output_dir=Path("out"), count=10)

        with mock.patch('plumage_batch.infrastructure.config.loader.os.cpu_count', return_value=None):
            assert config.resolve_parallelism() == 1

    def test_to_request(self):
        config = BatchConfig(output_dir=Path("out"), count=10, parallelism=4, on_error="abort")
        request = config.to_request()

        assert request.count == 10
        assert request.parallelism == 4
        assert request.policy is FailurePolicy.ABORT


@pytest.mark.parametrize("parallelism", [2.5, True, "4"])
def test_non_integer_parallelism_rejected(tmp_path, clean_env, parallelism):
    """Parallelism must be a real integer wherever it comes from."""
    with pytest.raises(ConfigurationError, match="Parallelism"):
        BatchConfig(output_dir=tmp_path, count=5, parallelism=parallelism)


def test_float_parallelism_in_yaml(tmp_path, clean_env):
    config_file = tmp_path / "batch.yaml"
    config_file.write_text("output_dir: out\ncount: 5\nparallelism: 2.5\n")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_file).load()


def test_explicit_missing_config_file(tmp_path, clean_env):
    """A config path given by the user must exist."""
    with pytest.raises(ConfigurationError, match="not found"):
        ConfigLoader(config_path=tmp_path / "missing.yaml").load(
            overrides={'output_dir': tmp_path, 'count': 1}
        )


def test_default_config_file_may_be_absent(tmp_path, clean_env):
    clean_env.chdir(tmp_path)

    config = ConfigLoader().load(overrides={'output_dir': tmp_path, 'count': 2})

    assert config.count == 2


def test_build_validates_merged_settings(tmp_path, clean_env):
    loader = ConfigLoader()

    assert loader.build({'output_dir': tmp_path, 'count': 3}).count == 3
    with pytest.raises(ConfigurationError, match="count"):
        loader.build({'output_dir': tmp_path})
