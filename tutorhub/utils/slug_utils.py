# Fichier : tutorhub/utils/slug_utils.py
from __future__ import annotations

import re
import unicodedata

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def strip_accents(value: str) -> str:
    return "".join(c for c in unicodedata.normalize("NFD", value) if unicodedata.category(c) != "Mn")


def slugify(value: str | None) -> str:
    """
    Transforme un titre libre en slug d'URL.
    Ex: "Développement Web!" -> "developpement-web", "  a   b--c " -> "a-b-c".
    Une entrée vide donne un slug vide: c'est à l'appelant de le refuser.
    """
    text = strip_accents((value or "").lower())
    text = _DISALLOWED.sub("", text)
    text = _WHITESPACE.sub("-", text.strip())
    text = _HYPHENS.sub("-", text)
    return text.strip("-")


def is_valid_slug(value: str | None) -> bool:
    return bool(value) and slugify(value) == value
