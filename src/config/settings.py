"""Environment-based configuration for trueskill-console."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

ENVS_DIR = Path(__file__).resolve().parents[2] / "envs"

DEFAULT_BASE_URL = "http://127.0.0.1:5000"


def env_file_path(env: str) -> Path:
    """Locate the dotenv profile ``envs/.env.<env>``.

    The repo ships a ``local`` profile pointing at the rating API on the
    loopback address; add more profiles beside it for other API hosts.

    Raises:
        FileNotFoundError: If no such profile exists. The message lists the
            profiles that do.
    """
    path = ENVS_DIR / f".env.{env}"
    if path.is_file():
        return path
    profiles = sorted(p.name for p in ENVS_DIR.glob(".env.*")) if ENVS_DIR.is_dir() else []
    msg = f"Env file not found: {path}"
    if profiles:
        msg += f" (available: {', '.join(profiles)})"
    raise FileNotFoundError(msg)


class ConsoleSettings(BaseSettings):
    """Console configuration loaded from a dotenv file + environment variables.

    Precedence: env vars > dotenv file > defaults. The per-submission base URL
    override from the CLI beats all of them.
    """

    model_config = {"env_prefix": "CONSOLE_"}

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    json_logs: bool = False
    log_level: str = "info"
