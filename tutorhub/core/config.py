# Fichier: tutorhub/core/config.py
from pydantic_settings import BaseSettings
from typing import List, Optional
from pydantic import AnyHttpUrl, ValidationError, field_validator
import sys


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str

    ENVIRONMENT: str = "development"

    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:8080",
        "http://127.0.0.1:5173",
    ]
    FRONTEND_BASE_URL: Optional[AnyHttpUrl] = None

    # --- Auth configuration ---
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DEFAULT_ADMIN_EMAIL: Optional[str] = None
    DEFAULT_ADMIN_PASSWORD: Optional[str] = None

    # --- Catalogue & discovery ---
    TUTORIALS_PAGE_SIZE: int = 6
    TUTORIALS_MAX_PAGE_SIZE: int = 48
    RECENT_TUTORIALS_LIMIT: int = 3

    # Fuseau utilisé pour le calcul du streak quand le client n'en fournit pas
    DEFAULT_TIMEZONE: str = "UTC"

    # Connexion à la base au démarrage
    DATABASE_CONNECTION_MAX_RETRIES: int = 1
    DATABASE_CONNECTION_RETRY_BACKOFF_SECONDS: float = 1.0

    # Reset password & emails (Resend); sans clé, l'envoi est seulement journalisé
    PASSWORD_RESET_TOKEN_EXPIRE_MINUTES: int = 30
    RESEND_API_KEY: Optional[str] = None
    EMAIL_FROM: Optional[str] = None

    # Performance instrumentation
    SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS: int = 300

    class Config:
        env_file = ".env"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def _normalize_database_url(cls, value: str) -> str:
        """Upgrade the legacy ``postgres://`` scheme to ``postgresql://``.

        Managed Postgres providers still hand out ``postgres://`` URLs, an alias
        SQLAlchemy dropped a long time ago (``NoSuchModuleError`` at import).
        SQLite and explicit driver URLs are left untouched.
        """

        if not isinstance(value, str):
            return value

        if value.startswith("postgres://"):
            return "postgresql://" + value[len("postgres://") :]

        return value


def _log_settings_validation_error(exc: ValidationError) -> None:
    """Pretty-print missing or invalid environment variables.

    The exception bubbles up during module import, which makes it hard to spot
    the culprit variable in server logs. We print the structured payload before
    re-raising.
    """

    header = "Configuration error while loading environment variables:"
    print(header, file=sys.stderr)

    details = exc.errors()
    if details:
        for error in details:
            location = ".".join(str(part) for part in error.get("loc", ()))
            message = error.get("msg", "Unknown validation error")
            type_name = error.get("type")
            hint_parts = [message]
            if type_name:
                hint_parts.append(f"(type={type_name})")
            hint = " ".join(hint_parts)
            print(f"  - {location}: {hint}", file=sys.stderr)
    else:
        print(exc, file=sys.stderr)


try:
    settings = Settings()
except ValidationError as exc:  # pragma: no cover - exercised at runtime
    _log_settings_validation_error(exc)
    raise
