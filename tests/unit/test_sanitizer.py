"""
Test per la normalizzazione dei dati importati
"""
from src.schemas.task_import_schema import ImportableTask
from src.services.csv_import.sanitizer import sanitize_task_data, sanitize_template_data
from tests.factories.csv_factory import create_template


def test_task_is_trimmed_and_defaulted():
    task = ImportableTask(
        title="  Clean room  ",
        description=" wipe surfaces ",
        owner_notes="\tcheck weekly\n",
        priority="",
        checklist_items=["Wipe", "  ", "", "Mop"]
    )

    sanitized = sanitize_task_data(task)

    assert sanitized.title == "Clean room"
    assert sanitized.description == "wipe surfaces"
    assert sanitized.owner_notes == "check weekly"
    assert sanitized.category == "operational"
    assert sanitized.priority == "medium"
    assert sanitized.due_type == "anytime"
    assert sanitized.recurrence == "once"
    assert sanitized.checklist_items == ["Wipe", "Mop"]


def test_sanitize_returns_new_model():
    task = ImportableTask(title=" Clean room ")
    sanitized = sanitize_task_data(task)
    assert task.title == " Clean room "
    assert sanitized is not task


def test_invalid_enum_is_kept():
    sanitized = sanitize_task_data(ImportableTask(title="Clean room", priority="urgent"))
    assert sanitized.priority == "urgent"


def test_task_sanitize_is_idempotent():
    task = ImportableTask(
        title=" Clean room ",
        description=None,
        owner_notes=" notes ",
        checklist_items=[" a ", "", "b"]
    )

    once = sanitize_task_data(task)
    twice = sanitize_task_data(once)

    assert once == twice


def test_template_sanitize_is_idempotent():
    template = create_template(title="  Imported Template  ", description=" desc ", category=None)

    once = sanitize_template_data(template)
    twice = sanitize_template_data(once)

    assert once == twice
    assert once.title == "Imported Template"
    assert once.category == "operational"
