"""Process-wide settings for the draft-md command line tool."""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from draft_md.config import ConversionConfig, HashConfig


class Settings(BaseSettings):
    if Path('.env').exists():
        model_config = SettingsConfigDict(
            env_prefix='DRAFT_MD_', env_file='.env', env_file_encoding='utf-8', extra='ignore'
        )
    else:
        model_config = SettingsConfigDict(env_prefix='DRAFT_MD_')

    # Logging level
    logging_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = 'WARNING'

    # Block separation
    empty_line_before_block: bool = False
    print_break_line_literal: bool = False

    # Accept JSON-object inline styles as raw CSS
    raw_css_inline_styles: bool = False

    # Hashtag detection
    hash_trigger: str = '#'
    hash_separator: str = ' '

    @field_validator('logging_level', mode='before')
    def upper_level(cls, level: str) -> str:
        return level.upper() if isinstance(level, str) else level

    def to_conversion_config(self) -> ConversionConfig:
        return ConversionConfig(
            empty_line_before_block=self.empty_line_before_block,
            print_break_line_literal=self.print_break_line_literal,
            raw_css_inline_styles=self.raw_css_inline_styles,
        )

    def to_hash_config(self) -> HashConfig:
        return HashConfig(trigger=self.hash_trigger, separator=self.hash_separator)
