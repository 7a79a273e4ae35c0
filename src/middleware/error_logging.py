"""
Middleware per il logging centralizzato di richieste ed errori
"""
import logging
import time
import traceback
import uuid
from typing import Callable, Dict, Any
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logga ogni richiesta con clinica e utente (se presenti) e gli errori non gestiti.

    Aggiunge gli header X-Process-Time e X-Request-ID alla risposta.
    """

    def __init__(self, app, log_requests: bool = True, log_responses: bool = False):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses

    @staticmethod
    def _request_context(request: Request, request_id: str) -> Dict[str, Any]:
        return {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "clinic_id": request.query_params.get("clinic_id"),
            "user_id": request.headers.get("x-user-id"),
        }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        context = self._request_context(request, request_id)

        if self.log_requests:
            logger.info(
                f"Request started: {request.method} {request.url.path}",
                extra={
                    **context,
                    "client_ip": request.client.host if request.client else None,
                    "content_length": request.headers.get("content-length"),
                }
            )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Request failed: {request.method} {request.url.path} - {type(exc).__name__}: {str(exc)}",
                extra={
                    **context,
                    "error_type": type(exc).__name__,
                    "process_time": time.time() - start_time,
                    "traceback": traceback.format_exc(),
                },
                exc_info=True
            )
            # Gestita dagli exception handler
            raise

        process_time = time.time() - start_time

        if self.log_responses or response.status_code >= 400:
            log = logger.warning if response.status_code >= 400 else logger.info
            log(
                f"Request completed: {request.method} {request.url.path} - {response.status_code}",
                extra={**context, "status_code": response.status_code, "process_time": process_time}
            )

        response.headers["X-Process-Time"] = str(process_time)
        response.headers["X-Request-ID"] = request_id

        return response
