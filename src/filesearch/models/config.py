"""
Settings data models for filesearch.

These models describe the optional YAML settings file: default search options,
where reports are written, how live progress behaves, and the log level.
Command-line options always take precedence over these values.
"""

from typing import Dict, Any
from pathlib import Path
from pydantic import BaseModel, Field, field_validator

from .search_query import OutputFormat, normalize_extensions


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DefaultsConfig(BaseModel):
    """
    Default search options used when the command line leaves them unset.

    Attributes:
        directory: Default target directory
        recursive: Whether scans are deep by default
        extensions: Default comma-separated extension filter
        output_format: Default output format
    """

    directory: str = Field(".", min_length=1, description="Default target directory")
    recursive: bool = Field(False, description="Deep scan by default")
    extensions: str = Field("", description="Default comma-separated extension filter")
    output_format: OutputFormat = Field(OutputFormat.TABULAR, description="Default output format")

    @field_validator('extensions', mode='before')
    @classmethod
    def validate_extensions(cls, v) -> str:
        """Accept either a comma-separated string or a YAML list."""
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return ",".join(str(ext) for ext in v)
        return str(v)

    @field_validator('output_format', mode='before')
    @classmethod
    def validate_output_format(cls, v) -> OutputFormat:
        """Validate and convert output format to enum."""
        return OutputFormat.parse(v)

    def get_extensions(self) -> tuple:
        """Get the default extensions in normalized form."""
        return normalize_extensions(self.extensions)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = self.model_dump()
        data['output_format'] = self.output_format.value
        return data


class OutputConfig(BaseModel):
    """
    Configuration for report files.

    Attributes:
        prefix: Fixed prefix of generated report filenames
        directory: Directory where report files are written
    """

    prefix: str = Field("output", min_length=1, description="Report filename prefix")
    directory: str = Field(".", min_length=1, description="Directory for report files")

    @field_validator('prefix')
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Reject prefixes that would escape the output directory."""
        if "/" in v or "\\" in v:
            raise ValueError(f"Output prefix must not contain path separators: {v}")
        return v

    @field_validator('directory')
    @classmethod
    def validate_directory(cls, v: str) -> str:
        """Expand user path but keep relative paths relative."""
        if v.startswith('~'):
            return str(Path(v).expanduser())
        return str(Path(v))

    def get_output_path(self) -> Path:
        """Get the output directory path."""
        return Path(self.directory)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class ProgressConfig(BaseModel):
    """
    Configuration for live progress during file-producing scans.

    Attributes:
        enabled: Whether live progress is shown at all
        throttle: Update the status line every N files during deep scans
    """

    enabled: bool = Field(True, description="Show live progress")
    throttle: int = Field(50, gt=0, description="Files between status updates")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class LoggingConfig(BaseModel):
    """Configuration for diagnostic logging."""

    level: str = Field("WARNING", description="Log level")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate and normalize the log level name."""
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}")
        return level

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class FileSearchSettings(BaseModel):
    """
    Main settings class for filesearch.

    Attributes:
        defaults: Default search options
        output: Report file settings
        progress: Live progress settings
        logging: Diagnostic logging settings
    """

    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig, description="Default search options")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Report file settings")
    progress: ProgressConfig = Field(default_factory=ProgressConfig, description="Live progress settings")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary representation."""
        return {
            'defaults': self.defaults.to_dict(),
            'output': self.output.to_dict(),
            'progress': self.progress.to_dict(),
            'logging': self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FileSearchSettings':
        """Create settings from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the settings."""
        parts = [f"Directory: {self.defaults.directory}"]
        parts.append(f"Recursive: {self.defaults.recursive}")
        parts.append(f"Output: {self.defaults.output_format.value}")
        parts.append(f"Reports in: {self.output.directory}")
        return " | ".join(parts)
