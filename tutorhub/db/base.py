"""Déclare l'ensemble des modèles SQLAlchemy pour ``Base.metadata.create_all``."""

from tutorhub.db.base_class import Base

# Utilisateurs
from tutorhub.models.user.user_model import User

# Catalogue
from tutorhub.models.tutorial.tutorial_model import Category, Tutorial

# Progression
from tutorhub.models.progress.user_tutorial_model import UserTutorial

__all__ = (
    "Base",
    "User",
    "Category",
    "Tutorial",
    "UserTutorial",
)
