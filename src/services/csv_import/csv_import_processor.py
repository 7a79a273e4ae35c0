"""
CSV Import Processor - parse and validate half of the import workflow.

Turns an uploaded CSV file into a validated {template, tasks} pair.
Nothing is persisted here.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Optional, Union

from src.core.exceptions import BaseApplicationException, ExceptionFactory
from src.schemas.task_import_schema import ImportableTask, ImportableTaskTemplate
from .csv_parser import CSVParser
from .import_validator import validate_import_data
from .models import ImportResult, ImportStage, ImportSummary, ParsedImportData
from .task_mapper import TaskMapper
from .template_settings import TemplateSettingsExtractor

logger = logging.getLogger(__name__)


class CSVImportProcessor:
    """
    Processor CSV: lettura file, parsing, mapping, validazione.

    Workflow:
    1. Read file
    2. Parse header + rows
    3. Map rows to tasks, template defaults from the first task
    4. Validate template + tasks
    """

    SUPPORTED_FORMATS = ['.csv', 'text/csv']

    TEMPLATE_HEADERS = [
        'title',
        'description',
        'category',
        'priority',
        'due-type',
        'due-date',
        'custom-due-date',
        'recurrence',
        'owner-notes',
        'assigned-to',
        'checklist-items',
        'attachments'
    ]

    SAMPLE_ROWS = [
        ['Morning Opening Routine', 'Complete checklist for opening the clinic', 'operational', 'high',
         'before_opening', '2024-01-15T09:00:00Z', '', 'daily', 'Must be completed before first patient', '',
         'Unlock doors|Turn on lights|Check temperature', ''],
        ['Equipment Check', 'Daily equipment maintenance check', 'operational', 'medium',
         'anytime', '', '', 'daily', 'Check all equipment is functioning', '',
         'Test X-ray machine|Check suction units|Verify autoclave', ''],
        ['Weekly Deep Clean', 'Thorough cleaning of all areas', 'operational', 'medium',
         'end_of_week', '', '', 'weekly', 'Schedule for Friday evenings', 'Dr. Smith',
         'Deep clean operatories|Sanitize equipment|Mop floors', ''],
    ]

    async def process_file(self, file: Any) -> ImportResult:
        """
        Process uploaded file.

        Args:
            file: Oggetto con `filename` e `async read()` (es. UploadFile)

        Returns:
            ImportResult - mai un'eccezione
        """
        filename = getattr(file, 'filename', None)
        try:
            content = await file.read()
        except Exception as e:
            logger.error(f"Unable to read import file {filename}: {str(e)}")
            exc = ExceptionFactory.unreadable_file(filename, str(e))
            return ImportResult.failure(exc.message, exc.error_code, ImportStage.READING_FILE)

        return self.process_content(content, filename)

    def process_content(self, content: Union[bytes, str], filename: Optional[str] = None) -> ImportResult:
        """
        Parse + validate del contenuto CSV.

        Args:
            content: Contenuto file (bytes o testo)
            filename: Nome file, usato nella descrizione del template

        Returns:
            ImportResult con template e task se validi
        """
        stage = ImportStage.PARSING
        try:
            text = CSVParser.decode(content)
            lines = CSVParser.split_lines(text)

            if len(lines) < 2:
                raise ExceptionFactory.not_enough_rows(len(lines))

            headers = CSVParser.parse_headers(lines[0])
            if 'title' not in headers:
                raise ExceptionFactory.missing_title_column(headers)

            tasks: List[ImportableTask] = []
            skipped_rows = 0
            extractor = TemplateSettingsExtractor()
            template_settings = extractor.default_settings()

            for row_number, line in enumerate(lines[1:], start=1):
                values = CSVParser.parse_values(line)

                # Skip righe vuote
                if not any(values):
                    continue

                task = TaskMapper.map_row(headers, values, row_number)
                if task is None:
                    skipped_rows += 1
                    continue

                tasks.append(task)
                # I default del template vengono solo dal primo task valido
                if len(tasks) == 1:
                    extractor.apply_first_task(template_settings, task)

            logger.info(f"Parsed {len(tasks)} tasks from CSV {filename} ({skipped_rows} rows skipped)")

            if not tasks:
                raise ExceptionFactory.no_valid_tasks(skipped_rows)

            template = ImportableTaskTemplate(
                title=self.build_template_title(),
                description=f"Bulk imported template with {len(tasks)} tasks from {filename or 'upload'}",
                clinic_id='',
                tasks=tasks,
                **template_settings
            )

            stage = ImportStage.VALIDATING
            validation = validate_import_data(ParsedImportData(template=template, tasks=tasks))
            if not validation.is_valid:
                raise ExceptionFactory.validation_failed(validation.errors)

            for warning in validation.warnings:
                logger.warning(f"Import warning: {warning}")

            return ImportResult(
                success=True,
                data=ParsedImportData(template=template, tasks=tasks),
                summary=ImportSummary(
                    total_tasks=len(tasks),
                    valid_tasks=len(tasks),
                    invalid_tasks=skipped_rows,
                    template_name=template.title,
                    warnings=validation.warnings
                ),
                stage=ImportStage.VALIDATING
            )

        except BaseApplicationException as e:
            logger.warning(f"CSV import rejected: {e.message}", extra={"error_code": e.error_code})
            return ImportResult.failure(e.message, e.error_code, stage)
        except Exception as e:
            logger.error(f"Unexpected error parsing CSV {filename}: {str(e)}")
            return ImportResult.failure(str(e) or 'Unknown import error', None, stage)

    @staticmethod
    def build_template_title(today: Optional[date] = None) -> str:
        today = today or date.today()
        return f"Imported Template - {today.month}/{today.day}/{today.year}"

    def get_supported_formats(self) -> List[str]:
        return list(self.SUPPORTED_FORMATS)

    def get_template_headers(self) -> List[str]:
        return list(self.TEMPLATE_HEADERS)

    def generate_template(self) -> str:
        """
        Genera il CSV di esempio: headers + righe di esempio, ogni cella tra virgolette.

        Reimportato, produce un task per ogni riga di esempio.
        """
        rows = [self.get_template_headers()] + self.SAMPLE_ROWS
        return '\n'.join(
            ','.join(f'"{cell}"' for cell in row)
            for row in rows
        )
