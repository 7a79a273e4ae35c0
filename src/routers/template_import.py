"""
Template Import Router

Endpoints per import di template di task (con i relativi task) da file CSV.
"""
from datetime import date
from fastapi import APIRouter, UploadFile, File, status
from fastapi.responses import JSONResponse, StreamingResponse

from src.core.dependencies import import_context_dependency, template_import_service_dependency
from src.core.exceptions import ExceptionFactory
from src.core.settings import get_import_settings
from src.schemas.task_import_schema import SupportedFormatsResponseSchema


router = APIRouter(
    prefix="/api/v1/templates/import",
    tags=["Template Import"]
)


def _check_upload(file: UploadFile) -> None:
    """Solo file .csv entro la dimensione massima"""
    if not file.filename or not file.filename.lower().endswith('.csv'):
        raise ExceptionFactory.unsupported_format(file.filename)

    max_size = get_import_settings().max_upload_size
    if file.size is not None and file.size > max_size:
        raise ExceptionFactory.file_too_large(file.filename, file.size, max_size)


@router.post(
    "/csv",
    status_code=status.HTTP_200_OK,
    response_description="CSV import completed"
)
async def import_template_csv(
    context: import_context_dependency,
    service: template_import_service_dependency,
    file: UploadFile = File(..., description="CSV file to import")
):
    """
    Import a task template and its tasks from a CSV file.

    **Workflow**:
    1. Parse CSV (header row + one task per row)
    2. Map columns to task fields, template defaults from the first task
    3. Validate (errors block the import, warnings do not)
    4. Create the template, then insert tasks in batches
    5. Return import result with summary

    **CSV Format**:
    - First row must be headers; only `title` is required
    - Header names are case-insensitive, `due_type`, `due-type` and `duetype` are equivalent
    - `checklist-items` uses `|` as separator

    **Partial failures**: if a task batch fails, the template and the batches
    already inserted are kept; `summary.template_id` and `summary.created_tasks`
    report what was written.
    """
    _check_upload(file)

    result = await service.import_file(file, context)

    if not result.success:
        return JSONResponse(status_code=422, content=result.to_dict())
    return result.to_dict()


@router.post(
    "/csv/validate",
    status_code=status.HTTP_200_OK,
    response_description="CSV validated"
)
async def validate_template_csv(
    service: template_import_service_dependency,
    file: UploadFile = File(..., description="CSV file to validate")
):
    """
    Parse and validate a CSV file without writing anything.

    Returns the parsed template, tasks, warnings and summary.
    """
    _check_upload(file)

    result = await service.validate_file(file)

    if not result.success:
        return JSONResponse(status_code=422, content=result.to_dict())
    return result.to_dict()


@router.get(
    "/template",
    status_code=status.HTTP_200_OK,
    response_description="CSV template downloaded"
)
async def download_csv_template(service: template_import_service_dependency):
    """
    Download the sample CSV: all supported headers plus three example tasks.
    """
    template_content = service.generate_template()
    filename = f"task-import-template-{date.today().isoformat()}.csv"

    return StreamingResponse(
        iter([template_content]),
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={filename}"
        }
    )


@router.get(
    "/supported-formats",
    status_code=status.HTTP_200_OK,
    response_model=SupportedFormatsResponseSchema
)
async def get_supported_formats(service: template_import_service_dependency):
    """Supported file formats and CSV headers"""
    return SupportedFormatsResponseSchema(
        formats=service.get_supported_formats(),
        headers=service.get_template_headers(),
        batch_size=get_import_settings().task_batch_size
    )
