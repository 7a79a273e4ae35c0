"""
Sistema di gestione errori centralizzato seguendo i principi SOLID
"""
from abc import ABC
from typing import Optional, Dict, Any, List
from enum import Enum

class ErrorCode(Enum):
    """Codici errore standardizzati"""
    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    REQUIRED_FIELD_MISSING = "REQUIRED_FIELD_MISSING"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"

    # Import errors
    IMPORT_PARSE_ERROR = "IMPORT_PARSE_ERROR"
    IMPORT_NO_VALID_TASKS = "IMPORT_NO_VALID_TASKS"
    IMPORT_VALIDATION_FAILED = "IMPORT_VALIDATION_FAILED"

    # Not found errors
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"

    # Infrastructure errors
    DATABASE_ERROR = "DATABASE_ERROR"
    FILE_READ_ERROR = "FILE_READ_ERROR"

class BaseApplicationException(Exception, ABC):
    """Base exception per l'applicazione"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 400
    ):
        self.message = message
        self.error_code = error_code.value
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Converte l'eccezione in dizionario per la risposta API"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "status_code": self.status_code
        }

class ValidationException(BaseApplicationException):
    """Errori di validazione"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 400)

class NotFoundException(BaseApplicationException):
    """Entità non trovata"""

    def __init__(
        self,
        entity_type: str,
        entity_id: Any = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if entity_id is not None:
            message = f"{entity_type} with id '{entity_id}' not found"
        else:
            message = f"{entity_type} not found"

        error_details = details or {}
        if entity_id is not None:
            error_details["entity_id"] = entity_id
        error_details["entity_type"] = entity_type

        super().__init__(
            message,
            ErrorCode.ENTITY_NOT_FOUND,
            error_details,
            404
        )

class InfrastructureException(BaseApplicationException):
    """Errori di infrastruttura"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 500)

# Factory per gli errori della pipeline di import
class ExceptionFactory:
    """Factory per creare eccezioni specifiche dell'import CSV"""

    @staticmethod
    def unreadable_file(filename: Optional[str], reason: str) -> InfrastructureException:
        return InfrastructureException(
            f"Unable to read file: {reason}",
            ErrorCode.FILE_READ_ERROR,
            {"filename": filename}
        )

    @staticmethod
    def not_enough_rows(line_count: int) -> ValidationException:
        return ValidationException(
            "CSV must contain at least a header row and one data row",
            ErrorCode.IMPORT_PARSE_ERROR,
            {"line_count": line_count}
        )

    @staticmethod
    def missing_title_column(headers: List[str]) -> ValidationException:
        return ValidationException(
            'CSV must contain at least a "title" column',
            ErrorCode.REQUIRED_FIELD_MISSING,
            {"headers": headers}
        )

    @staticmethod
    def no_valid_tasks(skipped_rows: int) -> ValidationException:
        return ValidationException(
            "No valid tasks found in CSV",
            ErrorCode.IMPORT_NO_VALID_TASKS,
            {"skipped_rows": skipped_rows}
        )

    @staticmethod
    def validation_failed(errors: List[str]) -> ValidationException:
        return ValidationException(
            f"Validation failed: {', '.join(errors)}",
            ErrorCode.IMPORT_VALIDATION_FAILED,
            {"errors": errors}
        )

    @staticmethod
    def unsupported_format(filename: Optional[str]) -> ValidationException:
        return ValidationException(
            "Only CSV files are currently supported",
            ErrorCode.UNSUPPORTED_FORMAT,
            {"filename": filename}
        )

    @staticmethod
    def file_too_large(filename: Optional[str], size: int, max_size: int) -> ValidationException:
        return ValidationException(
            f"File exceeds the maximum upload size of {max_size} bytes",
            ErrorCode.VALIDATION_ERROR,
            {"filename": filename, "size": size, "max_size": max_size}
        )
