"""Runtime settings, read from ``AGRIMARKET_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# relative to the working directory
_DEFAULT_DATA_DIR = Path("data")

NOTIFIERS = ("log", "email", "none")


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    env: str = "development"
    log_level: str = "INFO"
    notifier: str = "log"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None

    @property
    def is_production(self) -> bool:
        return self.env in ("production", "staging")

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        notifier = env.get("AGRIMARKET_NOTIFIER", "log").lower()
        if notifier not in NOTIFIERS:
            raise ValueError(
                f"AGRIMARKET_NOTIFIER must be one of {', '.join(NOTIFIERS)}, got {notifier!r}"
            )
        return Settings(
            data_dir=Path(env.get("AGRIMARKET_DATA_DIR", str(_DEFAULT_DATA_DIR))),
            env=env.get("AGRIMARKET_ENV", "development").lower(),
            log_level=env.get("AGRIMARKET_LOG_LEVEL", "INFO").upper(),
            notifier=notifier,
            smtp_host=env.get("AGRIMARKET_SMTP_HOST", "smtp.gmail.com"),
            smtp_port=int(env.get("AGRIMARKET_SMTP_PORT", "587")),
            smtp_user=env.get("AGRIMARKET_SMTP_USER"),
            smtp_password=env.get("AGRIMARKET_SMTP_PASSWORD"),
        )
