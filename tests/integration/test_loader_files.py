"""Integration tests for Loader against real example/local files."""

from pathlib import Path

import pytest

from scopeconf import (
    ConfigFileError,
    Loader,
    MissingConfigurationDataError,
    MissingConfigurationVariablesError,
    MissingEnvVariableError,
    NoSuchConfigurationVariableError,
    TemplateRenderError,
)
from scopeconf.observability.metrics import LoaderMetrics
from scopeconf.reconcile import DataSource


EXAMPLE_YML = """\
defaults:
  app_url: "http://127.0.0.1:3000"
test:
  api_key: "example1234"
"""

LOCAL_YML = """\
defaults:
  app_host: "127.0.0.1:3000"
test:
  api_key: "local1234"
"""


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Create an empty configuration directory."""
    directory = tmp_path / "config"
    directory.mkdir()
    return directory


def write(path: Path, content: str) -> Path:
    """Write a configuration file and return its path."""
    path.write_text(content, encoding="utf-8")
    return path


class TestLoaderFiles:
    """End-to-end Loader tests."""

    @pytest.mark.integration
    def test_example_only(self, config_dir: Path) -> None:
        """Test that the example alone backs the scope."""
        write(config_dir / "configuration.yml.example", EXAMPLE_YML)

        scope = Loader(config_dir / "configuration.yml", "configuration", "test").load()

        assert scope.keys() == ["app_url", "api_key"]
        assert scope.api_key == "example1234"
        with pytest.raises(NoSuchConfigurationVariableError):
            scope.app_host  # noqa: B018

    @pytest.mark.integration
    def test_local_covers_example(self, config_dir: Path) -> None:
        """Test that local values win and extra keys survive."""
        write(config_dir / "configuration.yml.example", EXAMPLE_YML)
        write(
            config_dir / "configuration.yml",
            'test:\n  app_url: "http://dwarf.local"\n  api_key: "local1234"\n  debug: true\n',
        )

        loader = Loader(config_dir / "configuration.yml", "configuration", "test")
        scope = loader.load()

        assert scope.to_dict() == {
            "app_url": "http://dwarf.local",
            "api_key": "local1234",
            "debug": True,
        }
        assert loader.source == DataSource.LOCAL

    @pytest.mark.integration
    def test_local_missing_example_key(self, config_dir: Path) -> None:
        """Test the app_url/app_host mismatch names app_url."""
        write(config_dir / "configuration.yml.example", EXAMPLE_YML)
        write(config_dir / "configuration.yml", LOCAL_YML)

        with pytest.raises(MissingConfigurationVariablesError) as exc_info:
            Loader(config_dir / "configuration.yml", "configuration", "test").load()

        assert exc_info.value.missing_keys == ["app_url"]
        assert "app_url" in str(exc_info.value)

    @pytest.mark.integration
    def test_no_files(self, config_dir: Path) -> None:
        """Test that no files at all is an error."""
        with pytest.raises(MissingConfigurationDataError):
            Loader(config_dir / "configuration.yml", "configuration", "test").load()

    @pytest.mark.integration
    def test_no_matching_env(self, config_dir: Path) -> None:
        """Test that files without the env section are an error."""
        write(config_dir / "configuration.yml.example", "production:\n  a: 1\n")
        write(config_dir / "configuration.yml", "production:\n  a: 2\n")

        with pytest.raises(MissingConfigurationDataError, match="tropical"):
            Loader(config_dir / "configuration.yml", "configuration", "tropical").load()

    @pytest.mark.integration
    def test_template_example_sibling(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that `.j2.example` files are rendered too."""
        monkeypatch.setenv("DWARF_PASSWORD", "dwarf123")
        write(
            config_dir / "cloud.yml.j2.example",
            "test:\n  password: \"{{ require_env('DWARF_PASSWORD') }}\"\n",
        )

        scope = Loader(config_dir / "cloud.yml.j2", "cloud", "test").load()

        assert scope.password == "dwarf123"

    @pytest.mark.integration
    def test_template_env_missing(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a missing required variable aborts the load."""
        monkeypatch.delenv("DWARF_PASSWORD", raising=False)
        write(
            config_dir / "cloud.yml.j2",
            "test:\n  password: \"{{ require_env('DWARF_PASSWORD') }}\"\n",
        )

        loader = Loader(config_dir / "cloud.yml.j2", "cloud", "test")
        with pytest.raises(MissingEnvVariableError):
            loader.load()

    @pytest.mark.integration
    def test_idempotent_reload(self, config_dir: Path) -> None:
        """Test that reloading unchanged files yields an equal scope."""
        write(config_dir / "configuration.yml.example", EXAMPLE_YML)
        loader = Loader(config_dir / "configuration.yml", "configuration", "test")

        assert loader.load() == loader.load()

    @pytest.mark.integration
    def test_template_runtime_error_counted(self, config_dir: Path) -> None:
        """Test that a failing template expression fails the load and is counted."""
        LoaderMetrics.reset()
        write(config_dir / "cloud.yml.j2", "test:\n  region: \"{{ require_env() }}\"\n")

        with pytest.raises(TemplateRenderError) as exc_info:
            Loader(config_dir / "cloud.yml.j2", "cloud", "test").load()

        assert exc_info.value.source == str(config_dir / "cloud.yml.j2")
        metrics = LoaderMetrics.get_instance()
        assert metrics.loads_total == 1
        assert metrics.load_failures_total == 1
        LoaderMetrics.reset()

    @pytest.mark.integration
    def test_colliding_keys_rejected(self, config_dir: Path) -> None:
        """Test that keys equal after string conversion fail the load."""
        write(config_dir / "configuration.yml", "test:\n  1: int\n  '1': str\n")

        with pytest.raises(ConfigFileError, match="'1'"):
            Loader(config_dir / "configuration.yml", "configuration", "test").load()
