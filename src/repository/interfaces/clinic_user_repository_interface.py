"""
Interfaccia per ClinicUser Repository seguendo ISP
"""
from abc import ABC, abstractmethod
from typing import Optional
from src.models.clinic_user import ClinicUser

class IClinicUserRepository(ABC):
    """Interface di sola lettura sui membri del team di una clinica"""

    @abstractmethod
    def get_active_by_email(self, email: str, clinic_id: str) -> Optional[ClinicUser]:
        """Utente attivo della clinica con questa email (case insensitive)"""
        pass

    @abstractmethod
    def get_active_by_name(self, name: str, clinic_id: str) -> Optional[ClinicUser]:
        """Unico utente attivo della clinica il cui nome contiene il testo"""
        pass
