"""
Template settings derived from the first imported task.
"""
from __future__ import annotations

from typing import Dict, Optional

from src.core.settings import get_import_settings
from src.schemas.task_import_schema import (
    ImportableTask,
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    DEFAULT_DUE_TYPE,
    DEFAULT_RECURRENCE,
)


class TemplateSettingsExtractor:
    """
    Ricava i default del template dal primo task mappato.

    Operazione one-shot: le righe successive non modificano mai i default
    del template, solo il proprio task.
    """

    INHERITED_FIELDS = ('category', 'due_type', 'recurrence', 'priority')

    def __init__(self, specialty: Optional[str] = None, source_type: Optional[str] = None):
        settings = get_import_settings()
        self._specialty = specialty or settings.default_specialty
        self._source_type = source_type or settings.import_source_type
        self._applied = False

    def default_settings(self) -> Dict[str, str]:
        """Default hardcoded del template"""
        return {
            'category': DEFAULT_CATEGORY,
            'specialty': self._specialty,
            'due_type': DEFAULT_DUE_TYPE,
            'recurrence': DEFAULT_RECURRENCE,
            'priority': DEFAULT_PRIORITY,
            'source_type': self._source_type,
        }

    def apply_first_task(self, settings: Dict[str, str], task: ImportableTask) -> bool:
        """
        Copia category, due_type, recurrence e priority del task nei settings.

        Returns:
            True se applicato, False se i settings erano già stati derivati
        """
        if self._applied:
            return False

        for field_name in self.INHERITED_FIELDS:
            value = getattr(task, field_name)
            if value:
                settings[field_name] = value

        self._applied = True
        return True
