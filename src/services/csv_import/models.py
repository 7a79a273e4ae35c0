"""
Data models for CSV Import System.

Immutable dataclasses for representing import/validation results.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional

from src.schemas.task_import_schema import ImportableTask, ImportableTaskTemplate


class ImportStage(str, Enum):
    """Fasi dell'import, in ordine di esecuzione"""
    READING_FILE = "reading_file"
    PARSING = "parsing"
    VALIDATING = "validating"
    CREATING_TEMPLATE = "creating_template"
    CREATING_TASKS = "creating_tasks"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(frozen=True)
class ImportContext:
    """
    Contesto esplicito di un import (clinica e utente che lo esegue).

    Viene passato a ogni chiamata: nessuno stato globale condiviso tra import.
    """
    clinic_id: str
    user_id: Optional[str] = None

    def log_extra(self) -> Dict[str, Any]:
        return {"clinic_id": self.clinic_id, "user_id": self.user_id}


@dataclass(frozen=True)
class ImportProgress:
    """Avanzamento notificato al chiamante durante l'import"""
    stage: ImportStage
    percentage: int
    message: str
    current_item: Optional[int] = None
    total_items: Optional[int] = None


@dataclass(frozen=True)
class ValidationResult:
    """
    Risultato validazione pre-import.

    Attributes:
        is_valid: True se non ci sono errori (i warning non bloccano)
        errors: Errori bloccanti
        warnings: Avvisi non bloccanti
    """
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ParsedImportData:
    """Template e task ricavati dal file"""
    template: ImportableTaskTemplate
    tasks: List[ImportableTask]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "template": self.template.model_dump(exclude={"tasks"}),
            "tasks": [task.model_dump() for task in self.tasks]
        }


@dataclass(frozen=True)
class ImportSummary:
    """
    Riepilogo import.

    Attributes:
        total_tasks: Task validi trovati nel file
        valid_tasks: Task che hanno superato la validazione
        invalid_tasks: Righe scartate dal mapper (titolo mancante o troppo corto)
        template_name: Titolo del template generato
        warnings: Avvisi del validatore
        template_id: ID del template creato (solo dopo la persistenza)
        created_tasks: Task effettivamente inseriti (solo dopo la persistenza)
    """
    total_tasks: int
    valid_tasks: int
    invalid_tasks: int
    template_name: str
    warnings: List[str] = field(default_factory=list)
    template_id: Optional[str] = None
    created_tasks: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_tasks": self.total_tasks,
            "valid_tasks": self.valid_tasks,
            "invalid_tasks": self.invalid_tasks,
            "template_name": self.template_name,
            "warnings": list(self.warnings),
            "template_id": self.template_id,
            "created_tasks": self.created_tasks
        }


@dataclass(frozen=True)
class ImportResult:
    """
    Risultato completo operazione import.

    Non viene mai sollevata un'eccezione verso il chiamante: ogni errore
    diventa un ImportResult con success=False e il messaggio in error.
    """
    success: bool
    data: Optional[ParsedImportData] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    summary: Optional[ImportSummary] = None
    stage: Optional[ImportStage] = None

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: Optional[str] = None,
        stage: Optional[ImportStage] = None,
        summary: Optional[ImportSummary] = None
    ) -> "ImportResult":
        return cls(
            success=False,
            data=None,
            error=error,
            error_code=error_code,
            summary=summary,
            stage=stage
        )

    def to_dict(self) -> Dict[str, Any]:
        """Converte in dizionario per risposta API"""
        result: Dict[str, Any] = {
            "success": self.success,
            "data": self.data.to_dict() if self.data else None,
        }
        if self.error is not None:
            result["error"] = self.error
            result["error_code"] = self.error_code
        if self.summary is not None:
            result["summary"] = self.summary.to_dict()
        if self.stage is not None:
            result["stage"] = self.stage.value
        return result
