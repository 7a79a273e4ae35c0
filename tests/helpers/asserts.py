"""
Helper per assertion nei test
"""
from typing import Any, Dict, List, Optional
from httpx import Response


def assert_error_response(
    response: Response,
    status_code: int,
    error_code: Optional[str] = None,
    message_contains: Optional[str] = None
):
    """
    Verifica che una response sia un errore applicativo con i dettagli specificati.

    Args:
        response: Response HTTP
        status_code: Status code atteso
        error_code: Codice errore atteso (opzionale)
        message_contains: Stringa che deve essere contenuta nel messaggio (opzionale)
    """
    assert response.status_code == status_code, \
        f"Expected status {status_code}, got {response.status_code}. Response: {response.text}"

    data = response.json()

    if error_code:
        assert "error_code" in data, f"Response should contain 'error_code'. Got: {data}"
        assert data["error_code"] == error_code, \
            f"Expected error_code '{error_code}', got '{data.get('error_code')}'"

    if message_contains:
        assert "message" in data, f"Response should contain 'message'. Got: {data}"
        assert message_contains.lower() in data["message"].lower(), \
            f"Message should contain '{message_contains}'. Got: {data['message']}"


def assert_import_failed(
    data: Dict[str, Any],
    error_contains: Optional[str] = None,
    stage: Optional[str] = None
):
    """
    Verifica un ImportResult fallito (dict restituito dall'API o da to_dict()).
    """
    assert data["success"] is False, f"Import should fail. Got: {data}"
    assert data["data"] is None
    assert data.get("error"), f"Failed import should carry an error message. Got: {data}"

    if error_contains:
        assert error_contains in data["error"], \
            f"Error should contain '{error_contains}'. Got: {data['error']}"

    if stage:
        assert data.get("stage") == stage, f"Expected stage '{stage}', got '{data.get('stage')}'"


def assert_import_succeeded(data: Dict[str, Any], task_titles: Optional[List[str]] = None):
    """
    Verifica un ImportResult riuscito e, opzionalmente, i titoli dei task nell'ordine del file.
    """
    assert data["success"] is True, f"Import should succeed. Got: {data}"
    assert data["data"] is not None
    assert "summary" in data

    if task_titles is not None:
        titles = [task["title"] for task in data["data"]["tasks"]]
        assert titles == task_titles, f"Expected tasks {task_titles}, got {titles}"
