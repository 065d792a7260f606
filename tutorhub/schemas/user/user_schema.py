# Fichier: tutorhub/schemas/user/user_schema.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from tutorhub.models.user.user_model import UserRole
from tutorhub.utils.datetime_utils import as_utc


# --- Schéma pour la Création d'Utilisateur ---
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)


# --- Schéma pour la Réponse de l'API ---
# Il n'y a PAS de mot de passe ici.
class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: EmailStr
    name: str
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    @field_validator("created_at", "last_login_at")
    @classmethod
    def _attach_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AdminStatsOut(BaseModel):
    total_tutorials: int = 0
    total_categories: int = 0
    total_users: int = 0
    completed_tutorials: int = 0


class ForgotPasswordIn(BaseModel):
    email: EmailStr


class ResetPasswordIn(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)
