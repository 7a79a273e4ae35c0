"""
Interfaccia per Task Repository seguendo ISP
"""
from abc import ABC, abstractmethod
from typing import List, Dict, Any
from src.models.task import Task

class ITaskRepository(ABC):
    """Interface per la repository dei task"""

    @abstractmethod
    def insert_batch(self, tasks: List[Dict[str, Any]]) -> List[Task]:
        """Inserisce un batch di task in una sola richiesta"""
        pass
