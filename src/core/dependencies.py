"""
Dependency injection per FastAPI seguendo DIP
"""
from typing import Annotated, Optional
from fastapi import Depends, Header, Query
from sqlalchemy.orm import Session
from src.database import get_db
from src.repository.task_template_repository import TaskTemplateRepository
from src.repository.task_repository import TaskRepository
from src.repository.clinic_user_repository import ClinicUserRepository
from src.services.csv_import.models import ImportContext
from src.services.csv_import.template_import_service import TemplateImportService
from src.services.interfaces.template_import_service_interface import ITemplateImportService

# Type aliases per le dipendenze
db_dependency = Annotated[Session, Depends(get_db)]


def get_import_context(
    clinic_id: str = Query(..., min_length=1, description="Clinica che riceve il template"),
    x_user_id: Optional[str] = Header(None, description="Utente che esegue l'import")
) -> ImportContext:
    """Contesto esplicito dell'import, ricavato dalla richiesta"""
    return ImportContext(clinic_id=clinic_id, user_id=x_user_id or None)


def get_template_import_service(db: db_dependency) -> ITemplateImportService:
    """Costruisce il servizio di import con i repository sulla sessione corrente"""
    return TemplateImportService(
        template_repository=TaskTemplateRepository(db),
        task_repository=TaskRepository(db),
        user_repository=ClinicUserRepository(db)
    )


import_context_dependency = Annotated[ImportContext, Depends(get_import_context)]
template_import_service_dependency = Annotated[ITemplateImportService, Depends(get_template_import_service)]
