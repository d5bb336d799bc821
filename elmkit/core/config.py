# core/config.py
"""
ElmKit Configuration Management

Handles loading, validation and saving of elm.config.json. Generation calls
receive an immutable ElmOptions value; nothing here is process-wide state.
"""

import re
import json
from pathlib import Path
from dataclasses import dataclass, field, replace
from typing import Dict, Any, Optional


__version__ = "0.1.0"

CONFIG_FILE_NAME = "elm.config.json"

_MODULE_NAME_PATTERN = re.compile(r"^[A-Z][A-Za-z0-9_]*(\.[A-Z][A-Za-z0-9_]*)*$")


def get_version() -> str:
    return __version__


@dataclass(frozen=True)
class ElmOptions:
    """
    Options to configure how code is generated.

    urlPrefix: protocol, host and path prefix used as the base of every
    request URL, e.g. "https://mydomain.com/api/v1". Empty by default, in
    which case URLs start at the path.
    """
    urlPrefix: str = ""


DEFAULT_ELM_OPTIONS = ElmOptions()


@dataclass
class OutputConfig:
    """Output configuration for the generated Elm module."""
    moduleName: str = "Generated.Api"
    location: str = "elm"

    def get_module_path(self, project_root: str) -> Path:
        """Get the .elm file path for the configured module name."""
        relative = Path(*self.moduleName.split(".")).with_suffix(".elm")
        return Path(project_root) / self.location / relative


@dataclass
class ElmKitConfig:
    """Complete ElmKit configuration."""
    options: ElmOptions = field(default_factory=ElmOptions)
    output: OutputConfig = field(default_factory=OutputConfig)

    def with_overrides(self, **overrides) -> 'ElmKitConfig':
        """
        Return a copy with keyword overrides applied.

        Recognized keys: urlPrefix, module_name, location. Unknown keys raise
        ValueError.
        """
        options = self.options
        output = OutputConfig(moduleName=self.output.moduleName, location=self.output.location)

        for key, value in overrides.items():
            if value is None:
                continue
            if key == "urlPrefix":
                options = replace(options, urlPrefix=value)
            elif key == "module_name":
                output.moduleName = _validate_module_name(value)
            elif key == "location":
                output.location = value
            else:
                raise ValueError(f"Unknown ElmKit option '{key}'")

        return ElmKitConfig(options=options, output=output)


def load_elmkit_config(project_root: Optional[str] = None) -> ElmKitConfig:
    """
    Load ElmKit configuration from elm.config.json or use defaults.

    Args:
        project_root: Project root directory (defaults to current directory)

    Returns:
        ElmKitConfig with loaded or default configuration
    """
    if project_root is None:
        project_root = str(Path.cwd())

    config_path = Path(project_root) / CONFIG_FILE_NAME

    if config_path.exists():
        return _load_config_from_file(config_path)
    return ElmKitConfig()


def _load_config_from_file(config_path: Path) -> ElmKitConfig:
    """Load configuration from existing file."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {config_path}: {e}")

    if not isinstance(config_data, dict):
        raise ValueError(f"Invalid config in {config_path}: expected a JSON object")

    return _validate_and_convert_config(config_data)


def _validate_and_convert_config(config_data: Dict[str, Any]) -> ElmKitConfig:
    """Validate and convert raw config data to ElmKitConfig object."""
    url_prefix = config_data.get("urlPrefix", "")
    if not isinstance(url_prefix, str):
        raise ValueError(f"Invalid urlPrefix: {url_prefix!r}")

    output_data = config_data.get("output", {})
    output_config = OutputConfig(
        moduleName=_validate_module_name(output_data.get("moduleName", "Generated.Api")),
        location=output_data.get("location", "elm")
    )

    return ElmKitConfig(options=ElmOptions(urlPrefix=url_prefix), output=output_config)


def _validate_module_name(module_name: str) -> str:
    if not isinstance(module_name, str) or not _MODULE_NAME_PATTERN.match(module_name):
        raise ValueError(f"Invalid Elm module name: {module_name!r}")
    return module_name


def save_elmkit_config(config: ElmKitConfig, project_root: str) -> Path:
    """Save configuration to elm.config.json and return its path."""
    config_path = Path(project_root) / CONFIG_FILE_NAME
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(_config_to_dict(config), f, indent=2, ensure_ascii=False)

    return config_path


def _config_to_dict(config: ElmKitConfig) -> Dict[str, Any]:
    """Convert ElmKitConfig to dictionary for JSON serialization."""
    return {
        "urlPrefix": config.options.urlPrefix,
        "output": {
            "moduleName": config.output.moduleName,
            "location": config.output.location
        }
    }
