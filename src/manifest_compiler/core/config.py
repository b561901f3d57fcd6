"""Configuration Management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Compiler settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="CODEGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Output
    component_path: str = Field(default="src/components", description="Output base directory")
    file_extension: Literal[".jsx", ".tsx"] = Field(default=".jsx", description="Component file extension")
    include_default_export: bool = Field(default=True, description="Emit `export default`")
    include_react_import: bool = Field(default=True, description="Emit `import React`")

    # Formatting
    enable_formatting: bool = Field(default=True, description="Run generated code through prettier")
    prettier_bin: str = Field(default="prettier", description="Prettier executable")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Validation
    max_manifest_size: int = Field(default=512 * 1024, gt=0, description="Max manifest size (bytes)")
    max_manifest_depth: int = Field(default=32, gt=0, description="Max manifest JSON nesting depth")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
