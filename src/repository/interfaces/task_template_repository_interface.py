"""
Interfaccia per TaskTemplate Repository seguendo ISP
"""
from abc import abstractmethod
from src.core.interfaces import IRepository
from src.models.task_template import TaskTemplate

class ITaskTemplateRepository(IRepository[TaskTemplate, str]):
    """Interface per la repository dei template"""

    @abstractmethod
    def increment_tasks_count(self, template_id: str, increment: int) -> TaskTemplate:
        """Aggiorna il contatore dei task generati dal template"""
        pass
