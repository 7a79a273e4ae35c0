"""
Interfaccia per Template Import Service seguendo ISP
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional
from src.services.csv_import.models import ImportContext, ImportProgress, ImportResult

ProgressCallback = Callable[[ImportProgress], None]

class ITemplateImportService(ABC):
    """Interface per il servizio di import dei template"""

    @abstractmethod
    async def import_file(
        self,
        file: Any,
        context: ImportContext,
        on_progress: Optional[ProgressCallback] = None
    ) -> ImportResult:
        """Importa un file CSV creando template e task"""
        pass

    @abstractmethod
    async def validate_file(self, file: Any) -> ImportResult:
        """Parsing e validazione senza persistenza"""
        pass

    @abstractmethod
    def generate_template(self) -> str:
        """CSV di esempio da scaricare"""
        pass

    @abstractmethod
    def get_supported_formats(self) -> List[str]:
        """Formati accettati"""
        pass

    @abstractmethod
    def get_template_headers(self) -> List[str]:
        """Colonne del CSV di esempio"""
        pass
