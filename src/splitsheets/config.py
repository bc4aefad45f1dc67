from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from splitsheets.models import DEFAULT_DUE_LABEL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    credentials_path: str = Field(..., alias="GOOGLE_CREDENTIALS_PATH")
    spreadsheet_id: str = Field(..., alias="SPREADSHEET_ID")
    worksheet_name: Optional[str] = Field(None, alias="WORKSHEET_NAME")
    due_label: str = Field(DEFAULT_DUE_LABEL, alias="DUE_LABEL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
