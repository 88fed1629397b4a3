from contextvars import ContextVar
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from adfconvert.constants import DEFAULT_PANEL_TYPE, DEFAULT_STATUS_COLOR
from adfconvert.files import get_config_file


class MarkdownConfiguration(BaseModel):
    """Configuration for the markdown conversion path."""

    heading_style: Literal['ATX', 'ATX_CLOSED', 'UNDERLINED'] = 'ATX'
    """The style used to render headings as markdown. Only ATX headings round-trip for every level."""
    bullets: str = '*+-'
    """Bullet characters used for nested bullet lists, cycled by nesting depth."""
    extended_marks: bool = False
    """If True, underline, subscript, superscript and text colors are rendered with non-standard markup delimiters
    (e.g. `__underline__`, `{color:red}text{color}`) instead of raw HTML. The markup does not convert back to ADF.
    Default is False."""
    alert_panels: bool = True
    """If True (default), `> [!NOTE]` style alert blockquotes are converted to panels and panels are rendered as
    alert blockquotes."""
    task_lists: bool = True
    """If True (default), `- [ ]` / `- [x]` list items are converted to task items."""


class ConverterConfiguration(BaseSettings):
    """The configuration for the adfconvert converters."""

    log_level: str = 'WARNING'
    """The log level of the package logger."""
    log_file: str | None = None
    """Path of the log file. When not set, `ADFCONVERT_LOG_FILE` or the default state directory is used."""
    sanitize_html: bool = False
    """If True, HTML passed to `html_to_adf` is structurally sanitized before conversion. Markdown input is always
    sanitized."""
    timestamp_unit: Literal['milliseconds', 'seconds'] = 'milliseconds'
    """The unit of the epoch timestamps stored in ADF date nodes."""
    default_status_color: str = DEFAULT_STATUS_COLOR
    """The color assigned to status elements that do not declare one."""
    default_panel_type: str = DEFAULT_PANEL_TYPE
    """The panel type assigned to panels that do not declare one."""
    markdown: MarkdownConfiguration = Field(default_factory=MarkdownConfiguration)
    """Markdown conversion configuration."""

    model_config = SettingsConfigDict(
        extra='ignore',
        validate_assignment=True,
        env_prefix='ADFCONVERT_',
        env_nested_delimiter='__',
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG', 'NOTSET'):
            raise ValueError(f'Unknown log level: {v}')
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        if adfconvert_config_file := os.getenv('ADFCONVERT_CONFIG_FILE'):
            conf_file = Path(adfconvert_config_file).resolve()
        else:
            conf_file = get_config_file()

        if conf_file.exists():
            return (
                init_settings,
                env_settings,
                dotenv_settings,
                YamlConfigSettingsSource(settings_cls, yaml_file=conf_file),
            )
        else:
            return (
                init_settings,
                env_settings,
                dotenv_settings,
            )


CONFIGURATION: ContextVar[ConverterConfiguration] = ContextVar('configuration')


def get_configuration() -> ConverterConfiguration:
    """Returns the active configuration, loading one from the environment when none has been set."""

    try:
        return CONFIGURATION.get()
    except LookupError:
        configuration = ConverterConfiguration()
        CONFIGURATION.set(configuration)
        return configuration
