"""
YAML settings parser for filesearch.

This module loads the optional settings file, validates it, and provides
helpful error messages for configuration issues. When no file is found the
built-in defaults are used.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from pydantic import ValidationError

from ..errors import FileSearchError
from ..models.config import FileSearchSettings


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    Result of a settings parsing operation.

    Attributes:
        settings: The parsed and validated settings
        warnings: List of non-fatal warnings
        config_path: Path to the settings file used
        is_default: Whether default settings were used
    """
    settings: FileSearchSettings
    warnings: List[str]
    config_path: Optional[Path]
    is_default: bool


class ConfigurationError(FileSearchError):
    """Raised when settings parsing or validation fails."""
    pass


class ConfigParser:
    """
    YAML settings parser with validation and error handling.

    Searches the current directory, the home directory and the XDG config
    directory for a settings file and converts it to FileSearchSettings.
    """

    DEFAULT_CONFIG_NAMES = [
        '.filesearch.yaml',
        '.filesearch.yml',
        'filesearch.yaml',
        'filesearch.yml',
    ]

    KNOWN_SECTIONS = ('defaults', 'output', 'progress', 'logging')

    def __init__(self, strict_mode: bool = False, search_paths: Optional[List[Path]] = None):
        """
        Initialize the settings parser.

        Args:
            strict_mode: If True, treat warnings as errors
            search_paths: Directories searched for a settings file
        """
        self.strict_mode = strict_mode
        self.search_paths = search_paths
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get_search_paths(self) -> List[Path]:
        """Directories searched for a settings file, in priority order."""
        if self.search_paths is not None:
            return list(self.search_paths)
        return [
            Path.cwd(),
            Path.home(),
            Path.home() / '.config' / 'filesearch',
        ]

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load and parse settings from file or use defaults.

        Args:
            config_path: Path to settings file. If None, searches for default files.

        Returns:
            ConfigParseResult containing parsed settings and metadata

        Raises:
            ConfigurationError: If settings are invalid or the file cannot be read
        """
        if config_path:
            config_path = Path(config_path)
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")

            config_data = self._load_yaml_file(config_path)
            is_default = False
        else:
            config_path, config_data = self._find_and_load_config()
            is_default = config_data is None
            if is_default:
                config_data = {}

        settings = self._validate_config_data(config_data, config_path)
        warnings = self._get_parser_warnings(config_data)

        if self.strict_mode and warnings:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(warnings)}")

        self.logger.info(f"Configuration loaded successfully from {config_path or 'defaults'}")

        return ConfigParseResult(
            settings=settings,
            warnings=warnings,
            config_path=config_path,
            is_default=is_default
        )

    def _find_and_load_config(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load a settings file from the default locations.

        Returns:
            Tuple of (config_path, config_data) or (None, None) if not found
        """
        for search_path in self.get_search_paths():
            for config_name in self.DEFAULT_CONFIG_NAMES:
                config_file = search_path / config_name
                if config_file.is_file():
                    config_data = self._load_yaml_file(config_file)
                    self.logger.info(f"Found configuration file: {config_file}")
                    return config_file, config_data

        self.logger.info("No configuration file found, using defaults")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse a YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML data as dictionary

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

        if not content.strip():
            self.logger.warning(f"Configuration file is empty: {file_path}")
            return {}

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

        return data

    def _validate_config_data(self, config_data: Dict[str, Any], config_path: Optional[Path]) -> FileSearchSettings:
        """
        Validate settings data and build the settings object.

        Raises:
            ConfigurationError: If a value is invalid
        """
        known = {key: value for key, value in config_data.items() if key in self.KNOWN_SECTIONS}
        for section, value in known.items():
            if value is not None and not isinstance(value, dict):
                raise ConfigurationError(f"Section '{section}' must be a YAML object, got {type(value).__name__}")

        cleaned = {key: value for key, value in known.items() if value is not None}

        try:
            return FileSearchSettings.from_dict(cleaned)
        except ValidationError as e:
            source = config_path or 'defaults'
            raise ConfigurationError(f"Configuration validation failed for {source}: {e}") from e

    def _get_parser_warnings(self, config_data: Dict[str, Any]) -> List[str]:
        """
        Get parser-specific warnings for a loaded settings file.

        Args:
            config_data: Raw settings data

        Returns:
            List of warning messages
        """
        warnings = []
        for key in config_data:
            if key not in self.KNOWN_SECTIONS:
                warnings.append(f"Unknown configuration section ignored: {key}")

        return warnings

    def get_config_template(self) -> str:
        """
        Get a template settings file with all options and comments.

        Returns:
            YAML template as string
        """
        template = FileSearchSettings().to_dict()

        lines = [
            "# filesearch configuration",
            "# Command-line options always override these values",
            "",
        ]

        sections = [
            ("defaults", "Default search options"),
            ("output", "Report files (json and md formats)"),
            ("progress", "Live progress for file-producing formats"),
            ("logging", "Diagnostic logging (written to stderr)"),
        ]

        for section_name, comment in sections:
            lines.append(f"# {comment}")
            section_yaml = yaml.dump({section_name: template[section_name]},
                                     default_flow_style=False,
                                     sort_keys=False)
            lines.append(section_yaml.rstrip())
            lines.append("")

        return "\n".join(lines)


def load_config(config_path: Optional[Union[str, Path]] = None, strict_mode: bool = False) -> ConfigParseResult:
    """
    Convenience function to load settings.

    Args:
        config_path: Path to settings file (optional)
        strict_mode: Whether to treat warnings as errors

    Returns:
        ConfigParseResult containing parsed settings

    Raises:
        ConfigurationError: If settings are invalid
    """
    parser = ConfigParser(strict_mode=strict_mode)
    return parser.load_config(config_path)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Create a template settings file.

    Raises:
        ConfigurationError: If the template cannot be written
    """
    parser = ConfigParser()
    template_content = parser.get_config_template()

    try:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(template_content)

    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
