"""YAML document parsing and environment section extraction."""

from pathlib import Path
from typing import Any, Final

import structlog
import yaml

from scopeconf.errors import ConfigFileError
from scopeconf.observability.metrics import LoaderMetrics
from scopeconf.template import is_template, render_template


logger = structlog.get_logger()

# Top-level section merged under every environment
DEFAULTS_KEY: Final[str] = "defaults"

ConfigValue = Any
ConfigMapping = dict[str, ConfigValue]


def symbolize_keys(value: ConfigValue, path: Path | str = "<document>") -> ConfigValue:
    """Recursively convert every mapping key to a string.

    Mappings nested inside sequences are converted too. Leaf values keep
    their native YAML type.

    Args:
        value: Parsed YAML tree.
        path: Source path for error messages.

    Returns:
        A new tree with canonical keys.

    Raises:
        ConfigFileError: If two keys of one mapping convert to the same string,
            such as `1` and `'1'`.
    """
    if isinstance(value, dict):
        result: ConfigMapping = {}
        for key, item in value.items():
            name = str(key)
            if name in result:
                raise ConfigFileError(f"Duplicate key '{name}' after conversion to string", path)
            result[name] = symbolize_keys(item, path)
        return result
    if isinstance(value, list):
        return [symbolize_keys(item, path) for item in value]
    return value


def read_document(path: Path) -> dict[str, ConfigValue]:
    """Read, render and parse a configuration file.

    Args:
        path: Existing configuration file.

    Returns:
        Parsed document with canonical keys.

    Raises:
        ConfigFileError: If the YAML is malformed or not a mapping.
        TemplateRenderError: If the template cannot be rendered.
        MissingEnvVariableError: If a required environment variable is unset.
    """
    content = path.read_text(encoding="utf-8")
    if is_template(path):
        content = render_template(content, source=str(path))

    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.error("config_yaml_parse_error", file_path=str(path), error=str(e))
        raise ConfigFileError(f"Invalid YAML: {e}", path) from e

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigFileError(
            f"Top-level YAML must be a mapping, got {type(parsed).__name__}", path
        )
    document: dict[str, ConfigValue] = symbolize_keys(parsed, path)
    return document


def extract_environment(
    document: dict[str, ConfigValue], env: str, path: Path | str = "<document>"
) -> ConfigMapping | None:
    """Merge the `defaults` section under the section for `env`.

    The merge is shallow: a mapping in the env section replaces the
    same-named mapping from `defaults` as a whole.

    Args:
        document: Parsed document with canonical keys.
        env: Requested environment name.
        path: Source path for error messages.

    Returns:
        Merged mapping, or None if the document has no section for `env`.

    Raises:
        ConfigFileError: If a section is not a mapping.
    """
    if env not in document:
        return None

    defaults = _section(document, DEFAULTS_KEY, path)
    env_data = _section(document, env, path)
    return {**defaults, **env_data}


def load_document(path: Path | str, scope: str, env: str) -> ConfigMapping | None:
    """Load the merged configuration of one file for a scope and env.

    Args:
        path: Configuration file path.
        scope: Scope name (for logging).
        env: Requested environment.

    Returns:
        Merged mapping, or None if the file is missing or lacks the env.
    """
    file_path = Path(path)
    log = logger.bind(component="scopeconf", scope=scope, env=env, file_path=str(file_path))

    if not file_path.exists():
        log.debug("config_file_absent")
        return None

    log.info("loading_config_file", template=is_template(file_path))
    document = read_document(file_path)
    LoaderMetrics.get_instance().record_file_parsed()

    data = extract_environment(document, env, file_path)
    if data is None:
        log.info("config_env_absent", environments=sorted(document))
        return None

    log.info("config_file_loaded", key_count=len(data))
    return data


def _section(document: dict[str, ConfigValue], key: str, path: Path | str) -> ConfigMapping:
    section = document.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigFileError(
            f"Section '{key}' must be a mapping, got {type(section).__name__}", path
        )
    return section
