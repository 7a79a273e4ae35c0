from uuid import uuid4

from sqlalchemy import Column, String, Boolean

from src.database import Base


class ClinicUser(Base):
    """
        Membro del team di una clinica.

        Usato dall'import solo in lettura, per risolvere il campo 'assigned_to'
        (email o nome) nell'id utente.
    """
    __tablename__ = "clinic_users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    clinic_id = Column(String(36), index=True, nullable=False)
    name = Column(String(200), nullable=False)
    email = Column(String(254), index=True, nullable=True)
    role = Column(String(50), default="assistant")
    is_active = Column(Boolean, default=True)
