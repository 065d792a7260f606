import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Imports de l'application
from tutorhub.core.config import settings
from tutorhub.core.security import get_password_hash
from tutorhub.db import base  # noqa: F401  (enregistre tous les modèles sur Base.metadata)
from tutorhub.db.base_class import Base
from tutorhub.db import session as db_session
from tutorhub.api.v2.api import api_router
from tutorhub.models.user.user_model import User, UserRole

# --- Configuration du logging ---
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# --- Initialisation de l'application FastAPI ---
app = FastAPI(
    title="TutorHub API V2",
    openapi_url="/api/v2/openapi.json"
)


def _sanitize_origin(origin: str | None) -> str | None:
    if not origin:
        return None
    value = origin.strip()
    if not value:
        return None
    if not value.startswith("http"):
        value = f"https://{value}"
    return value.rstrip("/")


def _build_cors_origins() -> list[str]:
    origins = {_sanitize_origin(o) for o in settings.BACKEND_CORS_ORIGINS}
    if settings.FRONTEND_BASE_URL is not None:
        origins.add(_sanitize_origin(str(settings.FRONTEND_BASE_URL)))

    additional = os.getenv("ADDITIONAL_CORS_ORIGINS")
    if additional:
        for origin in additional.split(","):
            origins.add(_sanitize_origin(origin))

    allow_origins = sorted({origin for origin in origins if origin})
    logger.info("CORS origins configurés: %s", allow_origins)
    return allow_origins


# --- Configuration des Middlewares ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=_build_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Authorization", "Content-Type", "X-Access-Token"],
)

app.include_router(api_router, prefix="/api/v2")


def ensure_default_admin() -> None:
    """Crée le compte administrateur décrit par DEFAULT_ADMIN_EMAIL / DEFAULT_ADMIN_PASSWORD."""
    email = (settings.DEFAULT_ADMIN_EMAIL or "").strip().lower()
    password = settings.DEFAULT_ADMIN_PASSWORD
    if not email or not password:
        logger.info("Aucun administrateur par défaut configuré.")
        return

    with db_session.SessionLocal() as session:
        admin_user = session.query(User).filter(User.email == email).first()
        if admin_user is None:
            logger.info("Création de l'administrateur par défaut '%s'.", email)
            session.add(
                User(
                    email=email,
                    name="Admin",
                    hashed_password=get_password_hash(password),
                    role=UserRole.ADMIN,
                    is_active=True,
                )
            )
            session.commit()
            logger.info("✅ Administrateur par défaut créé.")
        elif not admin_user.is_admin:
            admin_user.role = UserRole.ADMIN
            session.commit()
            logger.info("Compte '%s' promu administrateur.", email)
        else:
            logger.info("Administrateur par défaut déjà présent.")


# --- Événement de Démarrage ---
@app.on_event("startup")
def startup():
    logger.info("Vérification et création des tables de la base de données...")
    Base.metadata.create_all(bind=db_session.engine)
    logger.info("✅ Les tables de la base de données sont prêtes.")
    ensure_default_admin()


# --- Route Racine ---
@app.get("/")
def read_root():
    return {"message": "Welcome to TutorHub API V2!"}
