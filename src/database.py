from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from dotenv import load_dotenv

load_dotenv()

from src.core.settings import get_import_settings  # noqa: E402

SQLALCHEMY_DATABASE_URL = get_import_settings().database_url

connect_args = {"check_same_thread": False} if SQLALCHEMY_DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base per controllare il nostro DB
Base = declarative_base()


def get_db():
    """
        Generatore di sessione database.

        Crea una sessione database e la chiude automaticamente una volta completate le operazioni.
        È ideale per essere utilizzato con FastAPI come dipendenza per gestire la sessione al database.

        Yields:
            SessionLocal: Una sessione di SQLAlchemy aperta.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
