"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use STYLEMARK_ prefix (e.g., STYLEMARK_LANG_PREFIX=lang-).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use STYLEMARK_ prefix.

    Examples:
        STYLEMARK_LANG_PREFIX=lang-
        STYLEMARK_HEADING_ANCHORS=false
        STYLEMARK_PYGMENTS_NOCLASSES=true
    """

    model_config = SettingsConfigDict(
        env_prefix="STYLEMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Markdown renderer configuration
    lang_prefix: str = Field(
        default="language-",
        description="CSS class prefix for fenced code elements",
    )

    xhtml_out: bool = Field(
        default=True,
        description="Close void elements XHTML-style (<br />)",
    )

    html_enabled: bool = Field(
        default=False,
        description="Pass raw HTML in the Markdown body through to the output",
    )

    heading_anchors: bool = Field(
        default=True,
        description="Give headings slug id attributes for anchor linking",
    )

    # Highlighting configuration
    fallback_lexer: str = Field(
        default="text",
        description="Pygments lexer used when a fence language is not recognized",
    )

    pygments_noclasses: bool = Field(
        default=False,
        description="Emit inline styles instead of CSS token classes",
    )

    pygments_style: str = Field(
        default="default",
        description="Pygments style name (only used with inline styles)",
    )

    # Fence options
    options_delimiter: str = Field(
        default=";",
        description="Separator between key=value pairs in a fence render-options blob",
    )

    fence_name: Optional[str] = Field(
        default=None,
        description="Only fences whose first parameter equals this name get the "
        "run/source treatment (None: every fence)",
    )

    # Code block wrapper classes
    example_class: str = Field(default="example", description="Outer wrapper class")
    compiled_class: str = Field(
        default="exampleViewCode",
        description="Extra wrapper class for compiled (run-only) blocks",
    )
    run_class: str = Field(default="run", description="Run view class")
    source_class: str = Field(default="source", description="Source view class")

    # Logging
    verbosity: int = Field(
        default=0,
        description="LOG() threshold (0=quiet, 1=normal, 2=verbose, 3=debug)",
    )

    def wrapperClass_make(self, compiled: bool) -> str:
        """
        Build the outer wrapper class attribute value.

        Args:
            compiled: Whether the block renders run-only output

        Returns:
            Class string (e.g., "example" or "example exampleViewCode")

        Example:
            >>> settings = AppSettings()
            >>> settings.wrapperClass_make(True)
            'example exampleViewCode'
        """
        classes = [self.example_class]
        if compiled and self.compiled_class:
            classes.append(self.compiled_class)
        return " ".join(c for c in classes if c)


# Singleton instance - import this in your code
appsettings = AppSettings()
