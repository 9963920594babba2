from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SWMC_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # XML writer
    xml_header: str = '<?xml version="1.0" encoding="UTF-8"?>'
    indent_char: str = "\t"
    indent_size: int = Field(default=1, ge=0)
    escape: str = "partial"  # partial | full | minimal
    trailing_newlines: int = Field(default=2, ge=0)

    # Mesh decoder
    strict_submesh_triangles: bool = False


@lru_cache()
def get_settings() -> Settings:
    return Settings()
