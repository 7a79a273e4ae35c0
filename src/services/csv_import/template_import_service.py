"""
Template Import Service - Main orchestration service.

Coordinates the entire CSV template import workflow following SOLID principles:
read file → parse → map → validate → create template → create tasks → summary.

Template and task writes are not transactional: if a task batch fails, the
template and the batches already inserted stay in place.
"""
from __future__ import annotations

import dataclasses
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from src.core.exceptions import BaseApplicationException, InfrastructureException, ErrorCode
from src.core.settings import get_import_settings
from src.models.task_template import TaskTemplate
from src.models.task import Task
from src.repository.interfaces.task_template_repository_interface import ITaskTemplateRepository
from src.repository.interfaces.task_repository_interface import ITaskRepository
from src.repository.interfaces.clinic_user_repository_interface import IClinicUserRepository
from src.schemas.task_import_schema import (
    ImportableTask,
    ImportableTaskTemplate,
    VALID_CATEGORIES,
    VALID_PRIORITIES,
    VALID_DUE_TYPES,
    VALID_RECURRENCES,
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    DEFAULT_DUE_TYPE,
    DEFAULT_RECURRENCE,
)
from src.services.interfaces.template_import_service_interface import ITemplateImportService, ProgressCallback
from .assignment_resolver import AssignmentResolver
from .csv_import_processor import CSVImportProcessor
from .models import ImportContext, ImportProgress, ImportResult, ImportStage, ImportSummary
from .sanitizer import sanitize_task_data, sanitize_template_data

logger = logging.getLogger(__name__)


class TemplateImportService(ITemplateImportService):
    """
    Service principale per orchestrazione import template da CSV.

    Coordina: processor (parsing + validazione), creazione template,
    risoluzione assegnazioni, inserimento task a batch.
    """

    def __init__(
        self,
        template_repository: ITaskTemplateRepository,
        task_repository: ITaskRepository,
        user_repository: IClinicUserRepository,
        processor: Optional[CSVImportProcessor] = None,
        batch_size: Optional[int] = None
    ):
        self._template_repository = template_repository
        self._task_repository = task_repository
        self._user_repository = user_repository
        self._processor = processor or CSVImportProcessor()
        self._batch_size = batch_size or get_import_settings().task_batch_size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def import_file(
        self,
        file: Any,
        context: ImportContext,
        on_progress: Optional[ProgressCallback] = None
    ) -> ImportResult:
        """
        Import completo template + task da CSV.

        Workflow:
        1. Read + parse + validate (CSVImportProcessor)
        2. Create template record
        3. Resolve assignments, build task records
        4. Insert tasks in batches (fail-fast)
        5. Update template tasks count
        6. Return summary

        Args:
            file: File caricato (UploadFile o oggetto con filename e async read())
            context: Clinica e utente che eseguono l'import
            on_progress: Callback opzionale per l'avanzamento

        Returns:
            ImportResult - nessuna eccezione viene propagata al chiamante
        """
        filename = getattr(file, 'filename', None)
        log_extra = {**context.log_extra(), "upload_filename": filename}
        stage = ImportStage.READING_FILE
        created_template: Optional[TaskTemplate] = None
        created_tasks: List[Task] = []
        parsed_summary: Optional[ImportSummary] = None

        try:
            logger.info(f"Starting template import from {filename}", extra=log_extra)
            self._notify(on_progress, ImportStage.READING_FILE, 0, 'Reading file...')
            self._notify(on_progress, ImportStage.PARSING, 10, 'Parsing file...')

            result = await self._processor.process_file(file)
            if not result.success or not result.data:
                logger.warning(f"Import of {filename} failed: {result.error}", extra=log_extra)
                self._notify(on_progress, ImportStage.FAILED, 100, result.error or 'Failed to parse file')
                return result

            parsed_summary = result.summary
            stage = ImportStage.VALIDATING
            self._notify(on_progress, stage, 25, 'Validating data...')
            if parsed_summary and parsed_summary.warnings:
                logger.info(
                    f"{len(parsed_summary.warnings)} warnings found. Import will continue.",
                    extra=log_extra
                )

            # Step 2: template
            stage = ImportStage.CREATING_TEMPLATE
            self._notify(on_progress, stage, 50, 'Creating template...')
            template = sanitize_template_data(
                result.data.template.model_copy(update={'clinic_id': context.clinic_id})
            )
            created_template = self._template_repository.create(self._build_template_record(template, context))
            logger.info(f"Created template {created_template.id} '{created_template.title}'", extra=log_extra)

            # Step 3-4: task
            stage = ImportStage.CREATING_TASKS
            tasks = [sanitize_task_data(task) for task in result.data.tasks]
            self._notify(on_progress, stage, 75, 'Creating tasks...', 0, len(tasks))

            resolver = AssignmentResolver(self._user_repository)
            task_records = [
                self._build_task_record(task, created_template, context, resolver)
                for task in tasks
            ]
            self._insert_in_batches(task_records, created_tasks, on_progress)

            # Step 5: contatore
            self._template_repository.increment_tasks_count(created_template.id, len(created_tasks))

            self._notify(on_progress, ImportStage.COMPLETE, 100, 'Import completed successfully!')
            logger.info(
                f"Import completed: template {created_template.id} with {len(created_tasks)} tasks",
                extra=log_extra
            )

            return ImportResult(
                success=True,
                data=dataclasses.replace(result.data, template=template),
                summary=dataclasses.replace(
                    parsed_summary,
                    template_id=created_template.id,
                    created_tasks=len(created_tasks)
                ),
                stage=ImportStage.COMPLETE
            )

        except BaseApplicationException as e:
            return self._failure(e.message, e.error_code, stage, created_template, created_tasks,
                                 parsed_summary, on_progress, log_extra)
        except Exception as e:
            return self._failure(str(e) or 'Unknown import error', None, stage, created_template,
                                 created_tasks, parsed_summary, on_progress, log_extra)

    async def validate_file(self, file: Any) -> ImportResult:
        return await self._processor.process_file(file)

    def generate_template(self) -> str:
        return self._processor.generate_template()

    def get_supported_formats(self) -> List[str]:
        return self._processor.get_supported_formats()

    def get_template_headers(self) -> List[str]:
        return self._processor.get_template_headers()

    def _insert_in_batches(
        self,
        task_records: List[Dict[str, Any]],
        created: List[Task],
        on_progress: Optional[ProgressCallback]
    ) -> None:
        """
        Inserisce i task a blocchi di batch_size.

        Il primo batch fallito interrompe l'inserimento: i batch successivi non
        vengono tentati e quelli precedenti restano nel database (e in created).
        """
        total = len(task_records)

        for batch_number, start in enumerate(range(0, total, self._batch_size), start=1):
            batch = task_records[start:start + self._batch_size]
            try:
                created.extend(self._task_repository.insert_batch(batch))
            except BaseApplicationException as e:
                raise InfrastructureException(
                    f"Failed to create tasks batch {batch_number}: {e.message}",
                    ErrorCode.DATABASE_ERROR,
                    {"batch": batch_number, "inserted_tasks": len(created)}
                )
            except Exception as e:
                raise InfrastructureException(
                    f"Failed to create tasks batch {batch_number}: {str(e)}",
                    ErrorCode.DATABASE_ERROR,
                    {"batch": batch_number, "inserted_tasks": len(created)}
                )

            self._notify(
                on_progress,
                ImportStage.CREATING_TASKS,
                75 + int(20 * len(created) / total),
                f'Created {len(created)} of {total} tasks',
                len(created),
                total
            )

    def _build_template_record(self, template: ImportableTaskTemplate, context: ImportContext) -> Dict[str, Any]:
        return {
            'title': template.title,
            'description': template.description,
            'category': self._coerce(template.category, VALID_CATEGORIES, DEFAULT_CATEGORY),
            'specialty': template.specialty,
            'due_type': self._coerce(template.due_type, VALID_DUE_TYPES, DEFAULT_DUE_TYPE),
            'recurrence': self._coerce(template.recurrence, VALID_RECURRENCES, DEFAULT_RECURRENCE),
            'priority': self._coerce(template.priority, VALID_PRIORITIES, DEFAULT_PRIORITY),
            'owner_notes': template.owner_notes,
            'source_type': template.source_type,
            'clinic_id': context.clinic_id,
            'created_by': context.user_id,
            'is_active': True,
            'is_enabled': True,
            'tasks_count': 0,
        }

    def _build_task_record(
        self,
        task: ImportableTask,
        template: TaskTemplate,
        context: ImportContext,
        resolver: AssignmentResolver
    ) -> Dict[str, Any]:
        assignment = resolver.resolve(task.assigned_to, context.clinic_id)
        checklist = [
            {'id': f'item-{index}', 'title': item, 'completed': False}
            for index, item in enumerate(task.checklist_items, start=1)
        ]

        return {
            'template_id': template.id,
            'clinic_id': context.clinic_id,
            'created_by': context.user_id,
            'title': task.title,
            'description': task.description,
            'category': self._coerce(task.category, VALID_CATEGORIES, DEFAULT_CATEGORY),
            'priority': self._coerce(task.priority, VALID_PRIORITIES, DEFAULT_PRIORITY),
            'due_type': self._coerce(task.due_type, VALID_DUE_TYPES, DEFAULT_DUE_TYPE),
            'due_date': task.due_date,
            'custom_due_date': task.custom_due_date,
            'recurrence': self._coerce(task.recurrence, VALID_RECURRENCES, DEFAULT_RECURRENCE),
            'owner_notes': AssignmentResolver.merge_notes(task.owner_notes, assignment.assignee_note),
            'assigned_to': assignment.user_id,
            'checklist': checklist or None,
            'attachments': task.attachments,
            'status': 'pending',
            'generated_date': date.today(),
        }

    @staticmethod
    def _coerce(value: Optional[str], allowed: List[str], default: str) -> str:
        """Valori fuori dall'elenco diventano il default (erano già segnalati come warning)"""
        return value if value in allowed else default

    def _failure(
        self,
        message: str,
        error_code: Optional[str],
        stage: ImportStage,
        created_template: Optional[TaskTemplate],
        created_tasks: List[Task],
        parsed_summary: Optional[ImportSummary],
        on_progress: Optional[ProgressCallback],
        log_extra: Dict[str, Any]
    ) -> ImportResult:
        summary = None
        if created_template is not None and parsed_summary is not None:
            # Stato parziale: template creato, eventuali batch già inseriti non vengono annullati
            summary = dataclasses.replace(
                parsed_summary,
                template_id=created_template.id,
                created_tasks=len(created_tasks)
            )
        logger.error(f"Import failed during {stage.value}: {message}", extra={**log_extra, "stage": stage.value})
        self._notify(on_progress, ImportStage.FAILED, 100, message)
        return ImportResult.failure(message, error_code, stage, summary)

    @staticmethod
    def _notify(
        on_progress: Optional[ProgressCallback],
        stage: ImportStage,
        percentage: int,
        message: str,
        current_item: Optional[int] = None,
        total_items: Optional[int] = None
    ) -> None:
        logger.info(f"Import stage {stage.value} ({percentage}%): {message}", extra={"stage": stage.value})
        if on_progress is not None:
            on_progress(ImportProgress(stage, percentage, message, current_item, total_items))
