# Fichier: tutorhub/crud/user_crud.py

from sqlalchemy.orm import Session
from tutorhub.models.user.user_model import User, UserRole
from tutorhub.schemas.user.user_schema import UserCreate
from tutorhub.core.security import get_password_hash
from typing import Optional


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """
    Récupère un utilisateur par son adresse email (insensible à la casse).

    Args:
        db: La session de base de données.
        email: L'email de l'utilisateur à rechercher.

    Returns:
        L'objet User s'il est trouvé, sinon None.
    """
    return db.query(User).filter(User.email == email.strip().lower()).first()


def create_user(db: Session, user: UserCreate, role: UserRole = UserRole.USER) -> User:
    """
    Crée un nouvel utilisateur dans la base de données.

    Args:
        db: La session de base de données.
        user: L'objet UserCreate contenant les données du nouvel utilisateur.
        role: Rôle attribué (``user`` par défaut).

    Returns:
        L'objet User qui vient d'être créé.
    """
    db_user = User(
        email=str(user.email).strip().lower(),
        name=user.name.strip(),
        hashed_password=get_password_hash(user.password),
        role=role,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def delete_user(db: Session, user: User) -> None:
    """Supprime le compte et, par cascade, toute sa progression."""
    db.delete(user)
    db.commit()


def update_password(db: Session, user: User, password: str) -> User:
    user.hashed_password = get_password_hash(password)
    db.commit()
    db.refresh(user)
    return user


def count_users(db: Session) -> int:
    return db.query(User).count()
