import os
from dataclasses import dataclass

from dotenv import load_dotenv

DATABASE_URL_VAR = "UNEXCEPTIONAL_DATABASE_URL"
SQL_ECHO_VAR = "UNEXCEPTIONAL_SQL_ECHO"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Settings read from the environment (and a ``.env`` file, if present)."""

    database_url: str | None
    sql_echo: bool = False


def load_settings() -> Settings:
    load_dotenv()

    match os.getenv(DATABASE_URL_VAR):
        case str(url) if url.strip():
            database_url: str | None = url.strip()
        case _:
            database_url = None

    echo = os.getenv(SQL_ECHO_VAR, "").strip().lower() in _TRUTHY
    return Settings(database_url=database_url, sql_echo=echo)
