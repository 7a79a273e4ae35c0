"""
Test dei repository su SQLite in memoria
"""
from datetime import date
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from src.core.exceptions import InfrastructureException, NotFoundException
from src.models.task import Task
from src.repository.clinic_user_repository import ClinicUserRepository
from src.repository.task_repository import TaskRepository
from src.repository.task_template_repository import TaskTemplateRepository
from tests.factories.csv_factory import create_clinic_user


def _template_data(**kwargs):
    data = {"title": "Imported Template - 1/15/2024", "clinic_id": "clinic-1", "source_type": "csv_import"}
    data.update(kwargs)
    return data


def test_create_template_generates_id(db_session):
    repository = TaskTemplateRepository(db_session)

    template = repository.create(_template_data())

    assert template.id
    assert template.tasks_count == 0
    assert repository.get_by_id(template.id).title == "Imported Template - 1/15/2024"


def test_increment_tasks_count(db_session):
    repository = TaskTemplateRepository(db_session)
    template = repository.create(_template_data())

    repository.increment_tasks_count(template.id, 3)
    updated = repository.increment_tasks_count(template.id, 2)

    assert updated.tasks_count == 5


def test_increment_unknown_template(db_session):
    with pytest.raises(NotFoundException):
        TaskTemplateRepository(db_session).increment_tasks_count("missing", 1)


def test_insert_batch(db_session):
    template = TaskTemplateRepository(db_session).create(_template_data())
    repository = TaskRepository(db_session)

    created = repository.insert_batch([
        {"template_id": template.id, "title": "Clean room", "checklist": [{"id": "item-1", "title": "Wipe", "completed": False}],
         "generated_date": date(2024, 1, 15)},
        {"template_id": template.id, "title": "Order gloves"},
    ])

    assert [task.title for task in created] == ["Clean room", "Order gloves"]
    assert all(task.id for task in created)
    assert created[1].status == "pending"
    stored = {task.title: task for task in db_session.query(Task).filter(Task.template_id == template.id).all()}
    assert set(stored) == {"Clean room", "Order gloves"}
    assert stored["Clean room"].checklist[0]["title"] == "Wipe"


def test_insert_empty_batch(db_session):
    assert TaskRepository(db_session).insert_batch([]) == []


def test_insert_batch_database_error_is_wrapped(db_session):
    repository = TaskRepository(db_session)

    with patch.object(db_session, "commit", side_effect=OperationalError("INSERT", {}, Exception("locked"))):
        with pytest.raises(InfrastructureException) as exc_info:
            repository.insert_batch([{"title": "Clean room"}])

    assert "Database error inserting tasks batch" in exc_info.value.message


def test_user_lookup(db_session):
    db_session.add_all([
        create_clinic_user(id="u-1", name="Dr. Anna Smith", email="anna@clinic.test"),
        create_clinic_user(id="u-2", name="Dr. John Smith", email="john@clinic.test"),
        create_clinic_user(id="u-3", name="Maria Rossi", email="maria@clinic.test", is_active=False),
    ])
    db_session.commit()
    repository = ClinicUserRepository(db_session)

    assert repository.get_active_by_email("ANNA@clinic.test", "clinic-1").id == "u-1"
    assert repository.get_active_by_email("anna@clinic.test", "clinic-2") is None
    assert repository.get_active_by_name("Anna", "clinic-1").id == "u-1"
    # Nome ambiguo
    assert repository.get_active_by_name("Smith", "clinic-1") is None
    # Utente disattivato
    assert repository.get_active_by_name("Rossi", "clinic-1") is None


@pytest.mark.parametrize("name", ["_", "%", "Anna_", "100%"])
def test_user_lookup_wildcards_are_literal(db_session, name):
    db_session.add_all([
        create_clinic_user(id="u-1", name="Dr. Anna Smith", email="anna@clinic.test"),
        create_clinic_user(id="u-2", name="Dr. John Smith", email="john@clinic.test"),
    ])
    db_session.commit()

    assert ClinicUserRepository(db_session).get_active_by_name(name, "clinic-1") is None


def test_user_lookup_matches_literal_underscore(db_session):
    db_session.add_all([
        create_clinic_user(id="u-1", name="front_desk", email="desk@clinic.test"),
        create_clinic_user(id="u-2", name="frontXdesk", email="other@clinic.test"),
    ])
    db_session.commit()

    assert ClinicUserRepository(db_session).get_active_by_name("t_d", "clinic-1").id == "u-1"
