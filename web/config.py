"""Configuration for the YouTube SEO analyzer web app."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class AppConfig:
    app_env: str
    secret_key: str
    youtube_api_key: str
    max_results: int
    lookback_months: int
    worst_videos_limit: int
    output_folder: str
    save_artifacts: bool
    log_level: str

    @staticmethod
    def from_env() -> "AppConfig":
        output_folder = Path(os.getenv("OUTPUT_FOLDER", ".tmp/youtube_seo"))
        if not output_folder.is_absolute():
            output_folder = Path.cwd() / output_folder

        return AppConfig(
            app_env=os.getenv("APP_ENV", "development"),
            secret_key=os.getenv("SECRET_KEY", "dev-change-me"),
            youtube_api_key=os.getenv("YOUTUBE_API_KEY", ""),
            max_results=_env_int("MAX_RESULTS", 50),
            lookback_months=_env_int("LOOKBACK_MONTHS", 3),
            worst_videos_limit=_env_int("WORST_VIDEOS_LIMIT", 10),
            output_folder=str(output_folder),
            save_artifacts=_env_bool("SAVE_ARTIFACTS", False),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def to_flask_config(self) -> dict:
        return {
            "APP_ENV": self.app_env,
            "SECRET_KEY": self.secret_key,
            "YOUTUBE_API_KEY": self.youtube_api_key,
            "MAX_RESULTS": self.max_results,
            "LOOKBACK_MONTHS": self.lookback_months,
            "WORST_VIDEOS_LIMIT": self.worst_videos_limit,
            "OUTPUT_FOLDER": self.output_folder,
            "SAVE_ARTIFACTS": self.save_artifacts,
            "LOG_LEVEL": self.log_level,
        }
