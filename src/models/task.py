from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, String, Text, Date, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship

from src.database import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    template_id = Column(String(36), ForeignKey('task_templates.id'), index=True, nullable=True)
    clinic_id = Column(String(36), index=True, nullable=True)
    created_by = Column(String(36), nullable=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), default="operational")
    priority = Column(String(20), default="medium")
    due_type = Column(String(50), default="anytime")
    # ISO-8601 come prodotto dall'import
    due_date = Column(String(40), nullable=True)
    custom_due_date = Column(String(40), nullable=True)
    recurrence = Column(String(50), default="once")
    owner_notes = Column(Text, nullable=True)
    assigned_to = Column(String(36), nullable=True)
    checklist = Column(JSON, nullable=True)
    attachments = Column(JSON, nullable=True)
    status = Column(String(20), default="pending")
    generated_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    template = relationship("TaskTemplate", back_populates="tasks")
