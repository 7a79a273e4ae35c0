"""
Fixture principali per i test dell'import dei template
"""
import sys
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# Aggiungi il path del progetto
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.main import app
from src.database import Base, get_db
from tests.helpers.database import test_engine, TestSessionLocal, override_get_db
from tests.helpers.fakes import FakeClinicUserRepository, FakeTaskRepository, FakeTaskTemplateRepository


# ============================================================================
# Database Test Setup
# ============================================================================

@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Crea una sessione database isolata per ogni test.
    Le tabelle vengono ricreate a ogni test.
    """
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()

    try:
        yield session
        session.rollback()
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


# ============================================================================
# Fake Repositories
# ============================================================================

@pytest.fixture
def template_repository() -> FakeTaskTemplateRepository:
    return FakeTaskTemplateRepository()


@pytest.fixture
def task_repository() -> FakeTaskRepository:
    return FakeTaskRepository()


@pytest.fixture
def user_repository() -> FakeClinicUserRepository:
    return FakeClinicUserRepository()


# ============================================================================
# App Fixture con Overrides
# ============================================================================

@pytest.fixture(scope="function")
def test_app(db_session: Session):
    """
    Crea l'app FastAPI con il database di test.
    """
    app.dependency_overrides[get_db] = override_get_db

    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(test_app) -> TestClient:
    """Client HTTP sincrono"""
    return TestClient(test_app)
