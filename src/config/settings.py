"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use LOLMARK_ prefix (e.g., LOLMARK_ESCAPE_HTML=true).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use LOLMARK_ prefix.

    Examples:
        LOLMARK_SOURCE_SUFFIX=.lolz
        LOLMARK_ESCAPE_HTML=true
        LOLMARK_OUTPUT_FILE=index.html
    """

    model_config = SettingsConfigDict(
        env_prefix="LOLMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Input configuration
    source_suffix: str = Field(
        default=".lol",
        description="Required file extension of source documents",
    )

    # Output configuration
    output_file: str = Field(
        default="output.html",
        description="Default name of the generated HTML file",
    )

    escape_html: bool = Field(
        default=False,
        description="HTML-escape literal text, variable values and media addresses",
    )

    listing_style: str = Field(
        default="default",
        description="Pygments style used for highlighted source listings",
    )

    open_browser: bool = Field(
        default=False,
        description="Open the compiled page in the default browser",
    )

    @field_validator("source_suffix")
    @classmethod
    def suffix_normalize(cls, value: str) -> str:
        """Ensure the suffix carries its leading dot"""
        value = value.strip()
        if value and not value.startswith("."):
            value = f".{value}"
        return value

    def suffix_matches(self, filename: str) -> bool:
        """
        Check whether a filename carries the configured source suffix.

        Example:
            >>> settings = AppSettings()
            >>> settings.suffix_matches('hello.lol')
            True
            >>> settings.suffix_matches('hello.md')
            False
        """
        return filename.lower().endswith(self.source_suffix.lower())


# Singleton instance - import this in your code
appsettings = AppSettings()
