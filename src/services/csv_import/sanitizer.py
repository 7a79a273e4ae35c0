"""
Normalizzazione dei dati importati prima della persistenza.

Entrambe le funzioni sono idempotenti: applicarle due volte equivale ad applicarle una.
"""
from __future__ import annotations

from typing import Optional

from src.schemas.task_import_schema import (
    ImportableTask,
    ImportableTaskTemplate,
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    DEFAULT_DUE_TYPE,
    DEFAULT_RECURRENCE,
)


def _trim(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else None


def sanitize_template_data(template: ImportableTaskTemplate) -> ImportableTaskTemplate:
    return template.model_copy(update={
        'title': _trim(template.title),
        'description': _trim(template.description),
        'category': template.category or DEFAULT_CATEGORY,
        'priority': template.priority or DEFAULT_PRIORITY,
        'due_type': template.due_type or DEFAULT_DUE_TYPE,
        'recurrence': template.recurrence or DEFAULT_RECURRENCE,
        'owner_notes': _trim(template.owner_notes),
    })


def sanitize_task_data(task: ImportableTask) -> ImportableTask:
    return task.model_copy(update={
        'title': _trim(task.title),
        'description': _trim(task.description),
        'category': task.category or DEFAULT_CATEGORY,
        'priority': task.priority or DEFAULT_PRIORITY,
        'due_type': task.due_type or DEFAULT_DUE_TYPE,
        'recurrence': task.recurrence or DEFAULT_RECURRENCE,
        'owner_notes': _trim(task.owner_notes),
        'checklist_items': [item for item in task.checklist_items if item.strip()],
    })
