from pathlib import Path
import os

from dotenv import load_dotenv
from sqlalchemy.engine import URL

# Load environment variables from repo root and the package directory (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env")
load_dotenv(Path(__file__).resolve().parent / ".env")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def build_database_url(host: str, user: str, password: str, name: str, port: int) -> URL:
    """Build the MySQL connection URL, escaping credentials."""
    return URL.create(
        "mysql+pymysql",
        username=user,
        password=password,
        host=host,
        port=port,
        database=name,
    )


DB_HOST = os.getenv("DB_HOST") or "localhost"
DB_USER = os.getenv("DB_USER") or "user"
DB_PASSWORD = os.getenv("DB_PASSWORD") or "password"
DB_NAME = os.getenv("DB_NAME") or "tododb"
DB_PORT = _env_int("DB_PORT", 3306)

PORT = _env_int("PORT", 5000)

DATABASE_URL = build_database_url(DB_HOST, DB_USER, DB_PASSWORD, DB_NAME, DB_PORT)
