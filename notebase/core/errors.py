"""
Erreurs métier du workspace.

Chaque erreur porte le code HTTP à renvoyer; main.py les convertit en
réponse JSON ``{"detail": ...}``.
"""

from typing import Optional


class NotebaseError(Exception):
    """Base class for workspace errors."""

    status_code: int = 500

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or "")
        self.detail = detail


class NotFoundError(NotebaseError):
    """An operation referenced an id that does not exist."""

    status_code = 404


class ValidationError(NotebaseError):
    """Malformed payload (import without database/pages, duplicate column id...)."""

    status_code = 400


class ExternalServiceError(NotebaseError):
    """The text-generation service failed (network, auth, quota, timeout)."""

    status_code = 502


class ParseError(NotebaseError):
    """A stored JSON blob could not be decoded."""

    status_code = 422
