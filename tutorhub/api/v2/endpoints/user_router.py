# Fichier: tutorhub/api/v2/endpoints/user_router.py

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordRequestForm
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.orm import Session

from tutorhub.api.v2.dependencies import get_current_user, get_db
from tutorhub.core import security
from tutorhub.core.config import settings
from tutorhub.crud import user_crud
from tutorhub.models.user.user_model import User
from tutorhub.schemas.user import user_schema
from tutorhub.services.email import email_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=user_schema.User, status_code=status.HTTP_201_CREATED)
def create_user_endpoint(
    user_in: user_schema.UserCreate,
    db: Session = Depends(get_db),
):
    if user_crud.get_user_by_email(db, email=str(user_in.email)):
        raise HTTPException(status_code=400, detail="Email already registered")

    user = user_crud.create_user(db=db, user=user_in)
    logger.info("Nouvel utilisateur inscrit: %s", user.id)
    return user


@router.post("/login", response_model=user_schema.Token)
def login_for_access_token(
    response: Response,
    db: Session = Depends(get_db),
    form_data: OAuth2PasswordRequestForm = Depends(),
):
    # Le champ "username" du formulaire OAuth2 porte l'email
    user = user_crud.get_user_by_email(db, email=form_data.username)
    if not user or not security.verify_password(form_data.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Incorrect email or password")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="inactive_user")

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()

    access_token = security.create_access_token(subject=str(user.id))

    secure_cookie = settings.ENVIRONMENT == "production"
    response.set_cookie(
        key="access_token",
        value=access_token,
        httponly=True,
        samesite="none" if secure_cookie else "lax",
        secure=secure_cookie,
        path="/",
    )

    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/logout")
def logout() -> JSONResponse:
    response = JSONResponse({"message": "Logout successful"})
    response.delete_cookie(
        key="access_token",
        path="/",
        secure=settings.ENVIRONMENT == "production",
    )
    return response


@router.get("/me", response_model=user_schema.User)
def read_users_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_me(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    """Supprime définitivement le compte et toute la progression associée."""
    user_id = current_user.id
    user_crud.delete_user(db, current_user)
    logger.info("Compte %s supprimé à la demande de l'utilisateur.", user_id)
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(key="access_token", path="/")
    return response


@router.post("/forgot-password", status_code=status.HTTP_202_ACCEPTED)
def forgot_password(
    data: user_schema.ForgotPasswordIn,
    db: Session = Depends(get_db),
) -> dict:
    user = user_crud.get_user_by_email(db, email=str(data.email))
    if user is None or not user.is_active:
        # 202 pour éviter la révélation d'existence de compte
        return {"sent": True}

    token = security.create_password_reset_token(user.email, user.hashed_password)
    email_service.send_reset_email(user, token)
    logger.info("Lien de réinitialisation émis pour l'utilisateur %s.", user.id)
    return {"sent": True}


@router.post("/reset-password")
def reset_password(
    data: user_schema.ResetPasswordIn,
    db: Session = Depends(get_db),
) -> dict:
    try:
        email, fingerprint = security.decode_password_reset_token(data.token)
    except ExpiredSignatureError:
        raise HTTPException(status_code=400, detail="token_expired")
    except JWTError:
        raise HTTPException(status_code=400, detail="invalid_token")

    user = user_crud.get_user_by_email(db, email=email)
    # Le token n'est plus valable une fois le mot de passe changé
    if (
        user is None
        or not user.is_active
        or fingerprint != security.password_fingerprint(user.hashed_password)
    ):
        raise HTTPException(status_code=400, detail="invalid_token")

    user_crud.update_password(db, user, data.new_password)
    logger.info("Mot de passe réinitialisé pour l'utilisateur %s.", user.id)
    return {"reset": True}
