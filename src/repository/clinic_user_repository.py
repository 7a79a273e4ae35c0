"""
ClinicUser Repository (sola lettura)
"""
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from src.models.clinic_user import ClinicUser
from src.repository.interfaces.clinic_user_repository_interface import IClinicUserRepository
from src.core.exceptions import InfrastructureException

class ClinicUserRepository(IClinicUserRepository):

    def __init__(self, session: Session):
        self._session = session

    def get_active_by_email(self, email: str, clinic_id: str) -> Optional[ClinicUser]:
        try:
            return self._session.query(ClinicUser).filter(
                func.lower(ClinicUser.email) == email.lower(),
                ClinicUser.clinic_id == clinic_id,
                ClinicUser.is_active.is_(True)
            ).first()
        except SQLAlchemyError as e:
            raise InfrastructureException(f"Database error retrieving user by email: {str(e)}")

    @staticmethod
    def _escape_like(value: str) -> str:
        """Il testo del CSV va cercato alla lettera: % e _ non sono wildcard"""
        return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")

    def get_active_by_name(self, name: str, clinic_id: str) -> Optional[ClinicUser]:
        try:
            matches = self._session.query(ClinicUser).filter(
                ClinicUser.name.ilike(f"%{self._escape_like(name)}%", escape="\\"),
                ClinicUser.clinic_id == clinic_id,
                ClinicUser.is_active.is_(True)
            ).limit(2).all()
        except SQLAlchemyError as e:
            raise InfrastructureException(f"Database error retrieving user by name: {str(e)}")

        # Nome ambiguo: nessuna assegnazione
        return matches[0] if len(matches) == 1 else None
