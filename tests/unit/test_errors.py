"""Unit tests for the error taxonomy and hints."""

import pytest

from scopeconf.errors import (
    DEFAULT_HINT,
    ERROR_HINTS,
    ConfigFileError,
    MissingConfigurationDataError,
    MissingConfigurationVariablesError,
    MissingEnvVariableError,
    NoSuchConfigurationVariableError,
    NoSuchScopeError,
    ScopeconfError,
    ScopeNotLoadedError,
    TemplateRenderError,
    format_error,
)


class TestErrorMessages:
    """Tests for error context and messages."""

    @pytest.mark.unit
    def test_missing_configuration_data(self) -> None:
        """Test that scope, env and searched paths are reported."""
        error = MissingConfigurationDataError(
            "configuration", "tropical", ("a.yml.example", "a.yml")
        )
        assert error.scope == "configuration"
        assert error.env == "tropical"
        assert error.paths == ("a.yml.example", "a.yml")
        assert "'configuration'" in str(error)
        assert "'tropical'" in str(error)
        assert "a.yml.example" in str(error)

    @pytest.mark.unit
    def test_missing_configuration_variables(self) -> None:
        """Test that missing keys are listed comma separated."""
        error = MissingConfigurationVariablesError("configuration", "test", ["app_url", "port"])
        assert error.missing_keys == ["app_url", "port"]
        assert str(error).endswith("app_url, port")

    @pytest.mark.unit
    def test_no_such_variable_is_attribute_error(self) -> None:
        """Test that unknown key errors are AttributeErrors too."""
        error = NoSuchConfigurationVariableError("app_host", "configuration")
        assert isinstance(error, AttributeError)
        assert isinstance(error, ScopeconfError)

    @pytest.mark.unit
    def test_no_such_scope(self) -> None:
        """Test that available scopes are listed and name survives init."""
        error = NoSuchScopeError("clod", ["mail", "cloud"])
        assert error.name == "clod"
        assert error.available == ["cloud", "mail"]
        assert "available: cloud, mail" in str(error)

    @pytest.mark.unit
    def test_template_render_error_location(self) -> None:
        """Test that source and line are combined."""
        error = TemplateRenderError("unexpected end", source="cloud.yml.j2", lineno=3)
        assert "cloud.yml.j2:3" in str(error)
        assert "<template>" in str(TemplateRenderError("unexpected end"))

    @pytest.mark.unit
    def test_config_file_error_path(self) -> None:
        """Test that the path prefixes the message."""
        error = ConfigFileError("Invalid YAML", "config/a.yml")
        assert str(error) == "config/a.yml: Invalid YAML"


class TestHints:
    """Tests for error hints."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error",
        [
            MissingConfigurationDataError("s", "e"),
            MissingConfigurationVariablesError("s", "e", ["k"]),
            NoSuchConfigurationVariableError("k", "s"),
            MissingEnvVariableError("NAME"),
            TemplateRenderError("bad"),
            ConfigFileError("bad", "a.yml"),
            ScopeNotLoadedError("s"),
            NoSuchScopeError("s"),
        ],
    )
    def test_every_error_has_a_hint(self, error: ScopeconfError) -> None:
        """Test that every concrete error kind maps to a specific hint."""
        assert error.kind in ERROR_HINTS
        assert error.hint == ERROR_HINTS[error.kind]

    @pytest.mark.unit
    def test_base_error_default_hint(self) -> None:
        """Test that the base error falls back to the default hint."""
        assert ScopeconfError("boom").hint == DEFAULT_HINT

    @pytest.mark.unit
    def test_format_error_with_hint(self) -> None:
        """Test operator formatting with hint."""
        formatted = format_error(MissingEnvVariableError("DWARF_PASSWORD"))
        assert formatted.startswith("MissingEnvVariableError: ")
        assert "DWARF_PASSWORD" in formatted
        assert "\n    Hint: " in formatted

    @pytest.mark.unit
    def test_format_error_without_hint(self) -> None:
        """Test operator formatting without hint."""
        formatted = format_error(MissingEnvVariableError("X"), include_hint=False)
        assert "Hint" not in formatted
