from .task_template import TaskTemplate
from .task import Task
from .clinic_user import ClinicUser

__all__ = [
    "TaskTemplate",
    "Task",
    "ClinicUser",
]
