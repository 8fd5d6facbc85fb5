"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use CODEGUTTER_ prefix (e.g., CODEGUTTER_SHOW_LINE_NUMBERS=true).

Settings can also be loaded from a .env file in the project root. Instances
are frozen: a settings value is passed into each transform call and never
mutated afterwards.
"""

from typing import List, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.directives import (
    SHOW_LINE_NUMBERS,
    TRIM_BLANK_LINES,
    KEEP_OUTER_BLANK_LINE,
)


class AppSettings(BaseSettings):
    """
    Caller-level defaults via environment variables.

    Environment variables use CODEGUTTER_ prefix.

    Examples:
        CODEGUTTER_SHOW_LINE_NUMBERS=true
        CODEGUTTER_TRIM_BLANK_LINES=true
        CODEGUTTER_VERBOSITY=2
    """

    model_config = SettingsConfigDict(
        env_prefix="CODEGUTTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
    )

    # Directive defaults
    show_line_numbers: bool = Field(
        default=False,
        description="Number every code block unless it carries nolinenumbers",
    )

    trim_blank_lines: bool = Field(
        default=False,
        description="Drop a blank first/last line of every code block",
    )

    keep_outer_blank_line: bool = Field(
        default=False,
        description="Keep a blank first/last line even when trimming is requested",
    )

    # Pipeline configuration
    split_multiline_leaves: bool = Field(
        default=True,
        description="Split styled leaves spanning several lines into per-line leaves",
    )

    inserted_markers: Tuple[str, ...] = Field(
        default=("addition", "gi"),
        description="Class parts marking a diff insertion on a line's first token",
    )

    deleted_markers: Tuple[str, ...] = Field(
        default=("deletion", "gd"),
        description="Class parts marking a diff deletion on a line's first token",
    )

    # Logging configuration
    verbosity: int = Field(
        default=0,
        description="Logging verbosity (0 = silent, 1-3 increasingly chatty)",
    )

    def defaults_asDirectiveTokens(self) -> List[str]:
        """
        Express the directive defaults as directive tokens.

        Returns:
            Canonical directive keys switched on by these settings

        Example:
            >>> settings = AppSettings(show_line_numbers=True)
            >>> settings.defaults_asDirectiveTokens()
            ['showlinenumbers']
        """
        tokens = []
        if self.show_line_numbers:
            tokens.append(SHOW_LINE_NUMBERS)
        if self.trim_blank_lines:
            tokens.append(TRIM_BLANK_LINES)
        if self.keep_outer_blank_line:
            tokens.append(KEEP_OUTER_BLANK_LINE)
        return tokens


# Singleton instance - import this in your code
appsettings = AppSettings()
