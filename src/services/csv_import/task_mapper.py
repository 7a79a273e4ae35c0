"""
Task Mapper for CSV Import System.

Maps CSV row values to ImportableTask schemas with per-field coercion.
Follows Single Responsibility and Open/Closed principles.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

from dateutil import parser as date_parser

from src.schemas.task_import_schema import (
    ImportableTask,
    DEFAULT_CATEGORY,
    DEFAULT_PRIORITY,
    DEFAULT_DUE_TYPE,
    DEFAULT_RECURRENCE,
)

logger = logging.getLogger(__name__)


class TaskMapper:
    """
    Mapper riga CSV → ImportableTask.

    Stateless mapper - configurazione dichiarativa.
    """

    MIN_TITLE_LENGTH = 2
    CHECKLIST_SEPARATOR = '|'

    # Header normalizzato → campo del task
    FIELD_MAPPING: Dict[str, str] = {
        'title': 'title',
        'description': 'description',
        'category': 'category',
        'priority': 'priority',
        'duetype': 'due_type',
        'duedate': 'due_date',
        'customduedate': 'custom_due_date',
        'recurrence': 'recurrence',
        'ownernotes': 'owner_notes',
        'assignedto': 'assigned_to',
        'checklistitems': 'checklist_items',
        'checklist': 'checklist_items',
        'attachments': 'attachments',
    }

    DATE_FIELDS = {'due_date', 'custom_due_date'}

    # Default applicati ai campi assenti
    DEFAULT_VALUES: Dict[str, Any] = {
        'description': '',
        'category': DEFAULT_CATEGORY,
        'priority': DEFAULT_PRIORITY,
        'due_type': DEFAULT_DUE_TYPE,
        'recurrence': DEFAULT_RECURRENCE,
        'owner_notes': '',
    }

    @staticmethod
    def normalize_header(header: str) -> str:
        """due_type, due-type e duetype diventano tutti 'duetype'"""
        return header.strip().lower().replace('_', '').replace('-', '')

    @staticmethod
    def resolve_field(header: str) -> Optional[str]:
        """Campo del task corrispondente all'header, None se sconosciuto"""
        return TaskMapper.FIELD_MAPPING.get(TaskMapper.normalize_header(header))

    @staticmethod
    def map_row(headers: List[str], values: List[str], row_number: int = 0) -> Optional[ImportableTask]:
        """
        Map CSV row to ImportableTask.

        Args:
            headers: Headers del file
            values: Valori della riga (stesso ordine degli headers)
            row_number: Numero riga (1-based, esclude header) per il logging

        Returns:
            ImportableTask, oppure None se il titolo manca o è troppo corto
        """
        fields: Dict[str, Any] = {}

        for index, header in enumerate(headers):
            value = values[index].strip() if index < len(values) and values[index] else ''
            if not value:
                continue

            field_name = TaskMapper.resolve_field(header)
            if field_name is None:
                # Header sconosciuti ignorati
                continue

            if field_name in TaskMapper.DATE_FIELDS:
                iso_value = TaskMapper.to_iso_date(value)
                if iso_value is not None:
                    fields[field_name] = iso_value
            elif field_name == 'checklist_items':
                fields[field_name] = TaskMapper.parse_checklist(value)
            elif field_name == 'attachments':
                fields[field_name] = TaskMapper.parse_attachments(value)
            else:
                fields[field_name] = value

        title = fields.get('title')
        if not title or len(title) < TaskMapper.MIN_TITLE_LENGTH:
            logger.warning(f"Skipping row {row_number} - invalid or missing title")
            return None

        for key, default_value in TaskMapper.DEFAULT_VALUES.items():
            fields.setdefault(key, default_value)

        return ImportableTask(**fields)

    @staticmethod
    def to_iso_date(value: str) -> Optional[str]:
        """
        Converte una data in ISO-8601 UTC (es. 2024-01-15T09:00:00.000Z).

        Le date senza fuso vengono considerate UTC. Ritorna None se la data
        non è interpretabile.
        """
        try:
            parsed = date_parser.parse(value)
        except (ValueError, OverflowError):
            return None

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        else:
            parsed = parsed.astimezone(timezone.utc)

        return TaskMapper.format_iso(parsed)

    @staticmethod
    def format_iso(value: datetime) -> str:
        return value.strftime('%Y-%m-%dT%H:%M:%S') + f".{value.microsecond // 1000:03d}Z"

    @staticmethod
    def parse_checklist(value: str) -> List[str]:
        """Voci separate da '|', ordine preservato, voci vuote scartate"""
        items = [item.strip() for item in value.split(TaskMapper.CHECKLIST_SEPARATOR)]
        return [item for item in items if item]

    @staticmethod
    def parse_attachments(value: str) -> Any:
        """JSON se valido, altrimenti la stringa originale"""
        try:
            return json.loads(value)
        except (ValueError, RecursionError):
            return value
