# modbundle/src/modbundle/core/config.py

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_KIT_URL = "https://github.lawpaul.workers.dev/?user=LawPaul&repo=MH2p_SD_ModKit"


class Settings(BaseSettings):
    # Sources
    kit_url: str = Field(default=DEFAULT_KIT_URL)
    catalog_path: Optional[str] = Field(default=None)
    product_name: str = Field(default="MH2p")

    # Network
    fetch_timeout: float = Field(default=60.0, gt=0)
    max_concurrent_fetches: int = Field(default=1, ge=1)
    user_agent: str = Field(default="modbundle/0.3")

    # Output
    collision_policy: str = Field(default="overwrite", pattern="^(overwrite|error)$")
    compression: str = Field(default="deflate", pattern="^(deflate|store)$")

    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MODBUNDLE_",
        extra="ignore",
    )

    def bundle_filename(self) -> str:
        return f"{self.product_name}_ModKit_Mods_Bundle.zip"


# Instantiate settings
settings = Settings()
