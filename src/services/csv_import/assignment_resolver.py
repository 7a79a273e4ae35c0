"""
Risoluzione del campo assigned_to (UUID, email o nome) nell'ID di un utente della clinica.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from src.repository.interfaces.clinic_user_repository_interface import IClinicUserRepository
from .import_validator import UUID_PATTERN, EMAIL_PATTERN

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssignmentResolution:
    user_id: Optional[str]
    assignee_note: Optional[str]


class AssignmentResolver:
    """
    Risolve le assegnazioni di un singolo import.

    La cache vive quanto l'istanza: ogni import ne crea una nuova.
    """

    NOT_FOUND = object()

    def __init__(self, user_repository: IClinicUserRepository):
        self._user_repository = user_repository
        self._cache: Dict[str, object] = {}

    def resolve(self, assigned_to: Optional[str], clinic_id: str) -> AssignmentResolution:
        """
        Args:
            assigned_to: Valore della colonna assigned-to
            clinic_id: Clinica in cui cercare l'utente

        Returns:
            AssignmentResolution con user_id oppure una nota "Assigned to: ..."
        """
        if not assigned_to or not assigned_to.strip():
            return AssignmentResolution(user_id=None, assignee_note=None)

        value = assigned_to.strip()
        if UUID_PATTERN.match(value):
            return AssignmentResolution(user_id=value, assignee_note=None)

        cache_key = f"{clinic_id}:{value.lower()}"
        if cache_key not in self._cache:
            self._cache[cache_key] = self._lookup(value, clinic_id)

        cached = self._cache[cache_key]
        if cached is self.NOT_FOUND:
            return AssignmentResolution(user_id=None, assignee_note=self.build_note(value))
        return AssignmentResolution(user_id=cached, assignee_note=None)

    def _lookup(self, value: str, clinic_id: str) -> object:
        try:
            if EMAIL_PATTERN.match(value):
                user = self._user_repository.get_active_by_email(value, clinic_id)
                if user:
                    return user.id

            user = self._user_repository.get_active_by_name(value, clinic_id)
            if user:
                return user.id
        except Exception as e:
            logger.warning(f"Error resolving assignment '{value}': {str(e)}", extra={"clinic_id": clinic_id})

        return self.NOT_FOUND

    @staticmethod
    def build_note(value: str) -> str:
        return f"Assigned to: {value}"

    @staticmethod
    def merge_notes(owner_notes: Optional[str], assignee_note: Optional[str]) -> Optional[str]:
        """Accoda la nota di assegnazione alle note del proprietario"""
        if not assignee_note:
            return owner_notes
        return f"{owner_notes}\n{assignee_note}" if owner_notes else assignee_note
