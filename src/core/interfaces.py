"""
Interfacce base per il sistema seguendo ISP (Interface Segregation Principle)
"""
from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, Any

T = TypeVar('T')
K = TypeVar('K')

class IRepository(Generic[T, K], ABC):
    """Interface base per repository seguendo ISP"""

    @abstractmethod
    def get_by_id(self, id: K) -> Optional[T]:
        """Ottiene un'entità per ID"""
        pass

    @abstractmethod
    def create(self, entity: Any) -> T:
        """Crea una nuova entità e la restituisce con l'ID generato"""
        pass
