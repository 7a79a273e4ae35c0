"""
Import Validator for CSV Import System.

Validates the assembled template and task set before persistence.
Errors block the import, warnings are advisory only.
"""
from __future__ import annotations

import re
from typing import List, Optional

from dateutil import parser as date_parser

from src.schemas.task_import_schema import (
    ImportableTask,
    ImportableTaskTemplate,
    VALID_CATEGORIES,
    VALID_PRIORITIES,
    VALID_DUE_TYPES,
    VALID_RECURRENCES,
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    DEFAULT_DUE_TYPE,
    DEFAULT_RECURRENCE,
)
from .models import ValidationResult, ParsedImportData

TEMPLATE_TITLE_MIN = 2
TEMPLATE_TITLE_MAX = 200
TASK_TITLE_MIN = 2
TASK_TITLE_MAX = 255
DESCRIPTION_WARN_LENGTH = 1000
OWNER_NOTES_WARN_LENGTH = 500
CHECKLIST_WARN_ITEMS = 20

UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$',
    re.IGNORECASE
)
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def validate_import_data(data: ParsedImportData) -> ValidationResult:
    """
    Valida template e task insieme.

    Funzione pura: stesso input, stesso output.
    """
    errors: List[str] = []
    warnings: List[str] = []

    template_validation = validate_template(data.template)
    errors.extend(template_validation.errors)
    warnings.extend(template_validation.warnings)

    tasks_validation = validate_tasks(data.tasks)
    errors.extend(tasks_validation.errors)
    warnings.extend(tasks_validation.warnings)

    return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)


def validate_template(template: ImportableTaskTemplate) -> ValidationResult:
    errors: List[str] = []
    warnings: List[str] = []

    if not template.title or len(template.title.strip()) < TEMPLATE_TITLE_MIN:
        errors.append('Template title is required and must be at least 2 characters')

    if template.title and len(template.title) > TEMPLATE_TITLE_MAX:
        errors.append('Template title must be less than 200 characters')

    # Validazione soft: il valore resta, la persistenza userà il default
    _check_enum(warnings, 'category', template.category, VALID_CATEGORIES, DEFAULT_CATEGORY)
    _check_enum(warnings, 'priority', template.priority, VALID_PRIORITIES, DEFAULT_PRIORITY)
    _check_enum(warnings, 'recurrence', template.recurrence, VALID_RECURRENCES, DEFAULT_RECURRENCE)
    _check_enum(warnings, 'due-type', template.due_type, VALID_DUE_TYPES, DEFAULT_DUE_TYPE)

    return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)


def validate_tasks(tasks: Optional[List[ImportableTask]]) -> ValidationResult:
    errors: List[str] = []
    warnings: List[str] = []

    if not tasks:
        errors.append('At least one task is required')
        return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

    for index, task in enumerate(tasks):
        task_number = index + 1

        if not task.title or len(task.title.strip()) < TASK_TITLE_MIN:
            errors.append(f'Task {task_number}: Title is required and must be at least 2 characters')

        if task.title and len(task.title) > TASK_TITLE_MAX:
            errors.append(f'Task {task_number}: Title must be less than 255 characters')

        if task.description and len(task.description) > DESCRIPTION_WARN_LENGTH:
            warnings.append(
                f'Task {task_number}: Description is quite long ({len(task.description)} characters)'
            )

        if task.owner_notes and len(task.owner_notes) > OWNER_NOTES_WARN_LENGTH:
            warnings.append(
                f'Task {task_number}: Owner notes are quite long ({len(task.owner_notes)} characters)'
            )

        if task.checklist_items and len(task.checklist_items) > CHECKLIST_WARN_ITEMS:
            warnings.append(
                f'Task {task_number}: Has many checklist items ({len(task.checklist_items)}). '
                f'Consider splitting into multiple tasks'
            )

        if task.due_date and not is_valid_iso_date(task.due_date):
            warnings.append(f'Task {task_number}: Invalid due date format. Should be ISO 8601 format')

        if task.custom_due_date and not is_valid_iso_date(task.custom_due_date):
            warnings.append(f'Task {task_number}: Invalid custom due date format. Should be ISO 8601 format')

        if task.assigned_to and not is_valid_uuid_or_email(task.assigned_to):
            warnings.append(f'Task {task_number}: assigned_to should be a valid user ID or email address')

    duplicates = find_duplicate_titles(tasks)
    if duplicates:
        warnings.append(f"Found duplicate task titles: {', '.join(duplicates)}")

    return ValidationResult(is_valid=len(errors) == 0, errors=errors, warnings=warnings)


def find_duplicate_titles(tasks: List[ImportableTask]) -> List[str]:
    """Titoli ripetuti (case-insensitive, trimmed), una volta sola, in ordine di comparsa"""
    seen = set()
    duplicates: List[str] = []
    for task in tasks:
        if not task.title:
            continue
        key = task.title.strip().lower()
        if not key:
            continue
        if key in seen and key not in duplicates:
            duplicates.append(key)
        seen.add(key)
    return duplicates


def is_valid_iso_date(value: str) -> bool:
    """Data interpretabile e con separatore 'T' (quindi con componente oraria)"""
    if 'T' not in value:
        return False
    try:
        date_parser.isoparse(value)
    except (ValueError, OverflowError):
        return False
    return True


def is_valid_uuid_or_email(value: str) -> bool:
    return bool(UUID_PATTERN.match(value) or EMAIL_PATTERN.match(value))


def _check_enum(warnings: List[str], label: str, value: Optional[str], allowed: List[str], default: str) -> None:
    if value and value not in allowed:
        warnings.append(f'Invalid {label} "{value}". Will default to "{default}"')
