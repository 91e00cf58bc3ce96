# app/config.py - Environment driven settings

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL

REQUIRED_VARS = ("APP_PORT", "DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_NAME")


class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    """Service configuration.

    Built once at startup with ``Settings.from_env()`` and passed to
    ``create_app`` / ``create_db_engine``.
    """

    app_port: int
    db_host: str
    db_port: int
    db_user: str
    db_password: str
    db_name: str
    app_host: str = "0.0.0.0"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[dict] = None) -> "Settings":
        if env is None:
            load_dotenv()
            env = os.environ

        missing = [key for key in REQUIRED_VARS if not env.get(key)]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        return cls(
            app_port=_get_int(env, "APP_PORT"),
            db_host=env["DB_HOST"],
            db_port=_get_int(env, "DB_PORT"),
            db_user=env["DB_USER"],
            db_password=env["DB_PASSWORD"],
            db_name=env["DB_NAME"],
            app_host=env.get("APP_HOST") or "0.0.0.0",
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def database_url(self) -> URL:
        return URL.create(
            "postgresql+psycopg2",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


def _get_int(env, key: str) -> int:
    try:
        return int(env[key])
    except ValueError as exc:
        raise ConfigError(f"Environment variable {key} must be an integer") from exc
