"""
Configuration settings for the Korje Hasana row-store client.

Uses Pydantic Settings to load environment variables for the backend endpoint,
collection names, network limits, and display defaults. Build one Settings
instance at startup and hand it to the service; components never look it up
on their own.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Backend selection
    backend_type: str = Field("sheetdb", alias="BACKEND_TYPE")
    sheetdb_base_url: str = Field(
        "https://sheetdb.io/api/v1/kcsid6691qn5p", alias="SHEETDB_BASE_URL"
    )
    script_url: str = Field(
        "https://script.google.com/macros/s/YOUR_SCRIPT_ID/exec", alias="SCRIPT_URL"
    )

    # Collection (sheet tab) names, case-sensitive
    applications_sheet: str = Field("applications", alias="APPLICATIONS_SHEET")
    donations_sheet: str = Field("donations", alias="DONATIONS_SHEET")
    volunteers_sheet: str = Field("volunteers", alias="VOLUNTEERS_SHEET")

    # Network
    request_timeout_seconds: float = Field(10.0, alias="REQUEST_TIMEOUT_SECONDS")
    read_retry_attempts: int = Field(2, alias="READ_RETRY_ATTEMPTS")

    # Statistics
    success_rate_policy: Literal["status", "decay"] = Field("status", alias="SUCCESS_RATE_POLICY")
    fundraising_goal: int = Field(100_000, alias="FUNDRAISING_GOAL")

    # Application
    app_name: str = Field("কর্জে হাসানা", alias="APP_NAME")
    contact_phone: str = Field("+8801650138333", alias="CONTACT_PHONE")
    contact_email: str = Field("jubajamayat.badalgachi@gmail.com", alias="CONTACT_EMAIL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="JSON_LOGS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def sheet_name(self, kind: str) -> str:
        """Return the configured collection name for a record kind value."""
        return {
            "application": self.applications_sheet,
            "donation": self.donations_sheet,
            "volunteer": self.volunteers_sheet,
        }[kind]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.

    Only the CLI entry point should call this; library code receives Settings
    as an argument.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
