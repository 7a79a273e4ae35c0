"""
TaskTemplate Repository seguendo SOLID
"""
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from src.models.task_template import TaskTemplate
from src.repository.interfaces.task_template_repository_interface import ITaskTemplateRepository
from src.core.base_repository import BaseRepository
from src.core.exceptions import InfrastructureException

class TaskTemplateRepository(BaseRepository[TaskTemplate, str], ITaskTemplateRepository):
    """Persistenza dei template di task"""

    def __init__(self, session: Session):
        super().__init__(session, TaskTemplate)

    def increment_tasks_count(self, template_id: str, increment: int) -> TaskTemplate:
        template = self.get_by_id_or_raise(template_id)
        try:
            template.tasks_count = (template.tasks_count or 0) + increment
            self._session.commit()
            self._session.refresh(template)
            return template
        except SQLAlchemyError as e:
            self._session.rollback()
            raise InfrastructureException(f"Database error updating tasks count of template {template_id}: {str(e)}")
