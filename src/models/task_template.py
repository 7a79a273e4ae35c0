from datetime import datetime
from uuid import uuid4

from sqlalchemy import Integer, Column, String, Text, Boolean, Date, DateTime, JSON
from sqlalchemy.orm import relationship

from src.database import Base


class TaskTemplate(Base):
    """
        Modello SQLAlchemy per la tabella 'task_templates'.

        Un template raggruppa i task generati da un singolo import CSV e ne conserva
        i valori di default (categoria, priorità, scadenza, ricorrenza).

        Attributes:
            id (Column): UUID del template, chiave primaria.
            clinic_id (Column): Clinica proprietaria, iniettata dal chiamante.
            created_by (Column): Utente che ha eseguito l'import.
            tasks_count (Column): Numero di task creati dal template.
            source_type (Column): Origine del template (es. 'csv_import').
    """
    __tablename__ = "task_templates"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    clinic_id = Column(String(36), index=True, nullable=True)
    created_by = Column(String(36), nullable=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), default="operational")
    specialty = Column(String(100), default="general")
    due_type = Column(String(50), default="anytime")
    recurrence = Column(String(50), default="once")
    priority = Column(String(20), default="medium")
    owner_notes = Column(Text, nullable=True)
    checklist = Column(JSON, nullable=True)
    attachments = Column(JSON, nullable=True)
    is_active = Column(Boolean, default=True)
    is_enabled = Column(Boolean, default=True)
    tasks_count = Column(Integer, default=0)
    source_type = Column(String(50), nullable=True)
    start_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    tasks = relationship("Task", back_populates="template")
