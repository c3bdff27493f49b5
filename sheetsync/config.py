"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    sheetsync_env: str = "development"
    sheetsync_log_level: str = "info"

    # Spritesheet packing
    sheetsync_min_size: tuple[int, int] = (128, 128)
    sheetsync_max_size: tuple[int, int] = (1024, 1024)
    sheetsync_padding: int = 0

    # Output
    sheetsync_debug_folder: str = ".sheetsync-debug"
    sheetsync_manifest_name: str = "sheetsync-manifest.json"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
