"""
Base Repository implementation seguendo SRP e OCP
"""
from typing import Generic, TypeVar, Optional, Dict, Any, Type, Union
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from src.core.interfaces import IRepository
from src.core.exceptions import NotFoundException, InfrastructureException

T = TypeVar('T')
K = TypeVar('K')


class BaseRepository(Generic[T, K], IRepository[T, K]):
    """Repository base con implementazioni comuni seguendo DRY e SRP"""

    def __init__(self, session: Session, model_class: Type[T]):
        self._session = session
        self._model_class = model_class

    @property
    def model_name(self) -> str:
        return self._model_class.__name__

    def get_by_id(self, id: K) -> Optional[T]:
        """Ottiene un'entità per ID"""
        try:
            return self._session.get(self._model_class, id)
        except SQLAlchemyError as e:
            raise InfrastructureException(f"Database error retrieving {self.model_name}: {str(e)}")

    def get_by_id_or_raise(self, id: K) -> T:
        """Ottiene un'entità per ID o lancia NotFoundException"""
        entity = self.get_by_id(id)
        if not entity:
            raise NotFoundException(self.model_name, id)
        return entity

    def create(self, entity: Union[T, Dict[str, Any]]) -> T:
        """Crea una nuova entità (istanza del modello o dizionario)"""
        instance = self._to_model(entity)
        try:
            self._session.add(instance)
            self._session.commit()
            self._session.refresh(instance)
            return instance
        except SQLAlchemyError as e:
            self._session.rollback()
            raise InfrastructureException(f"Database error creating {self.model_name}: {str(e)}")

    def _to_model(self, entity: Union[T, Dict[str, Any]]) -> T:
        if isinstance(entity, self._model_class):
            return entity
        if isinstance(entity, dict):
            return self._model_class(**entity)
        if hasattr(entity, 'model_dump'):
            return self._model_class(**entity.model_dump())
        raise ValueError(f"Cannot create {self.model_name} from {type(entity).__name__}")
