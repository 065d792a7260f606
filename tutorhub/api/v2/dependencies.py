import logging
import re
from urllib.parse import unquote

from typing import Generator, Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from jose import JWTError, ExpiredSignatureError, jwt

from tutorhub.db import session as db_session
from tutorhub.core import security
from tutorhub.models.user.user_model import User

log = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """One SQLAlchemy session per request.

    FastAPI caches dependencies per request, so the route handler and
    ``get_current_user`` receive the same session.
    """
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _normalize_token_value(raw_token: str | None) -> str | None:
    """Return a clean JWT string extracted from various transport formats.

    Browsers can percent-encode cookie values (``Bearer%20…``) and some
    frontends send quoted strings; ``Bearer`` prefixes are case-insensitive.
    """

    if raw_token is None:
        return None

    token = raw_token.strip().strip('"').strip("'")
    if not token:
        return None

    token = unquote(token)

    match = re.match(r"^(bearer|token)[\s,:]+(.+)$", token, flags=re.IGNORECASE)
    if match:
        token = match.group(2)

    token = token.strip()
    return token or None


def _decode_user_from_token(token: str | None, db: Session) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
    )

    token = _normalize_token_value(token)
    if not token:
        log.warning("Validation échouée: Pas de token fourni.")
        raise credentials_exception

    try:
        payload = jwt.decode(token, security.SECRET_KEY, algorithms=[security.ALGORITHM])
        user_id_str: Optional[str] = payload.get("sub")
        if user_id_str is None:
            log.warning("Validation échouée: Le token ne contient pas de 'sub'.")
            raise credentials_exception

        user_id = int(user_id_str)
    except ExpiredSignatureError:
        log.warning("Validation échouée: Le token a expiré.")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="token_expired")
    except (JWTError, ValueError, TypeError):
        log.warning("Validation échouée: Le token est invalide ou mal formé.")
        raise credentials_exception

    user = db.get(User, user_id)
    if user is None:
        log.warning("Validation échouée: Utilisateur avec ID %s non trouvé.", user_id)
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="inactive_user")

    return user


def _iter_token_candidates(request: Request) -> list[str | None]:
    return [
        request.cookies.get("access_token"),
        request.headers.get("Authorization"),
        request.headers.get("X-Access-Token"),
        request.query_params.get("access_token"),
    ]


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    last_unauthorized_error: HTTPException | None = None

    for candidate in _iter_token_candidates(request):
        token = _normalize_token_value(candidate)
        if not token:
            continue

        try:
            return _decode_user_from_token(token, db)
        except HTTPException as exc:
            if exc.status_code != status.HTTP_401_UNAUTHORIZED:
                raise
            last_unauthorized_error = exc

    if last_unauthorized_error is not None:
        raise last_unauthorized_error

    return _decode_user_from_token(None, db)


def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        log.warning("Accès admin refusé pour l'utilisateur %s.", current_user.id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="admin_required")
    return current_user
