import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

STORAGE_BACKENDS = {"sql", "file"}
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "sql").strip().lower()
DATA_DIR = os.getenv("DATA_DIR", "./data")
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/wellness.db")

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "60"))

# Off keeps the permissive behaviour: an admin may set any status from any other.
STRICT_SESSION_TRANSITIONS = _get_bool(os.getenv("STRICT_SESSION_TRANSITIONS"), default=False)
ALLOW_ADMIN_REGISTRATION = _get_bool(os.getenv("ALLOW_ADMIN_REGISTRATION"), default=True)

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"), ["http://localhost:3000"])


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and JWT_SECRET_KEY == "change-me":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if STORAGE_BACKEND not in STORAGE_BACKENDS:
        raise RuntimeError(f"STORAGE_BACKEND must be one of {sorted(STORAGE_BACKENDS)}.")
