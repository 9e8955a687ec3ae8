# shellkit/src/shellkit/core/config.py

import os
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="WARNING")

    # string-replace
    sed_command: str = Field(default="sed")
    replace_jobs: int = Field(default_factory=lambda: os.cpu_count() or 1)

    # ssh-wait
    ssh_wait_interval: float = Field(default=2.0)
    ssh_connect_timeout: int = Field(default=5)

    # Clipboard overrides, e.g. "xclip -selection primary -o"
    clipboard_read: Optional[str] = Field(default=None)
    clipboard_write: Optional[str] = Field(default=None)

    # run-quiet-on-success
    quiet_tmpdir: Optional[str] = Field(default=None)

    tmux_command: str = Field(default="tmux")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SHELLKIT_",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Read settings from the current environment."""
    return Settings()


# Instantiate settings
settings = get_settings()
