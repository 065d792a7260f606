# Fichier: tutorhub/core/security.py

import hashlib
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

from jose import JWTError, jwt
from passlib import exc as passlib_exc
from passlib.context import CryptContext

from tutorhub.core.config import settings

# --- Configuration de la Sécurité ---
SECRET_KEY = settings.SECRET_KEY
ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
logger = logging.getLogger(__name__)


def create_access_token(subject: Union[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Crée un token d'accès JWT."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta

    to_encode = {"exp": expire, "sub": str(subject)}
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_password(plain_password: str | None, hashed_password: str | None) -> bool:
    """Vérifie si un mot de passe en clair correspond à un mot de passe haché."""

    if not plain_password or not hashed_password:
        return False

    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError, passlib_exc.PasslibError) as exc:
        logger.warning("Password verification failed: %s", exc)
        return False


def get_password_hash(password: str) -> str:
    """Hache un mot de passe."""
    return pwd_context.hash(password)


# --- Réinitialisation du mot de passe ---
PASSWORD_RESET_PURPOSE = "password_reset"


def password_fingerprint(hashed_password: str) -> str:
    """Empreinte courte du hash courant: un token de reset meurt dès que le mot de passe change."""
    return hashlib.sha256(hashed_password.encode("utf-8")).hexdigest()[:16]


def create_password_reset_token(
    email: str,
    hashed_password: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.PASSWORD_RESET_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta

    to_encode = {
        "exp": expire,
        "sub": email,
        "purpose": PASSWORD_RESET_PURPOSE,
        "pwd": password_fingerprint(hashed_password),
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_password_reset_token(token: str) -> tuple[str, str]:
    """Retourne ``(email, empreinte)``.

    Lève ``ExpiredSignatureError`` si le token a expiré et ``JWTError`` s'il est
    invalide ou n'est pas un token de reset.
    """
    payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    email = payload.get("sub")
    if payload.get("purpose") != PASSWORD_RESET_PURPOSE or not email:
        raise JWTError("not a password reset token")
    return email, payload.get("pwd", "")
