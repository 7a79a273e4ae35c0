from typing import Optional, Any, List
from pydantic import BaseModel, Field


# Valori riconosciuti (validazione soft: valori diversi generano solo warning)
VALID_CATEGORIES = ['operational', 'administrative', 'clinical', 'specialty', 'training', 'calendar']
VALID_PRIORITIES = ['low', 'medium', 'high']
VALID_DUE_TYPES = ['before_opening', 'before_1pm', 'end_of_day', 'end_of_week', 'anytime']
VALID_RECURRENCES = ['once', 'daily', 'weekly', 'biweekly', 'monthly']

DEFAULT_CATEGORY = 'operational'
DEFAULT_PRIORITY = 'medium'
DEFAULT_DUE_TYPE = 'anytime'
DEFAULT_RECURRENCE = 'once'


class ImportableTask(BaseModel):
    """
        Schema di un task letto da una riga CSV.

        I campi enumerati (category, priority, due_type, recurrence) sono stringhe libere:
        i valori non riconosciuti vengono segnalati dal validatore come warning, mai scartati.

        Attributes:
            title (str): Titolo del task, 2-255 caratteri.
            due_date (Optional[str]): Scadenza ISO-8601, presente solo se la data era interpretabile.
            checklist_items (List[str]): Voci della checklist nell'ordine del file.
            attachments (Any): JSON decodificato oppure la stringa originale.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    due_type: Optional[str] = None
    due_date: Optional[str] = None
    custom_due_date: Optional[str] = None
    recurrence: Optional[str] = None
    owner_notes: Optional[str] = None
    assigned_to: Optional[str] = None
    checklist_items: List[str] = Field(default_factory=list)
    attachments: Optional[Any] = None


class ImportableTaskTemplate(BaseModel):
    """
        Schema del template generato da un import.

        Il clinic_id non viene mai valorizzato dal parser: lo inietta il chiamante.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    due_type: Optional[str] = None
    recurrence: Optional[str] = None
    specialty: Optional[str] = None
    owner_notes: Optional[str] = None
    source_type: Optional[str] = None
    clinic_id: Optional[str] = None
    tasks: List[ImportableTask] = Field(default_factory=list)


class SupportedFormatsResponseSchema(BaseModel):
    formats: list[str]
    headers: list[str]
    batch_size: int
