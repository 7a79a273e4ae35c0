"""
Task Repository seguendo SOLID
"""
import logging
from typing import List, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from src.models.task import Task
from src.repository.interfaces.task_repository_interface import ITaskRepository
from src.core.exceptions import InfrastructureException

logger = logging.getLogger(__name__)

class TaskRepository(ITaskRepository):
    """Persistenza dei task"""

    def __init__(self, session: Session):
        self._session = session

    def insert_batch(self, tasks: List[Dict[str, Any]]) -> List[Task]:
        """
        Inserisce un batch di task con un solo commit.

        Args:
            tasks: Dizionari con le colonne del task (template_id incluso)

        Returns:
            Task inseriti, con ID generato
        """
        if not tasks:
            return []

        try:
            instances = [Task(**data) for data in tasks]
            self._session.add_all(instances)
            self._session.commit()
            for instance in instances:
                self._session.refresh(instance)
            logger.debug(f"Inserted batch of {len(instances)} tasks")
            return instances
        except SQLAlchemyError as e:
            self._session.rollback()
            raise InfrastructureException(f"Database error inserting tasks batch: {str(e)}")
