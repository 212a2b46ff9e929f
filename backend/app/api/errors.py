from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backend.services.errors import DomainError, ReservationConflict

log = logging.getLogger("oms.api")


def _body(message: str, status: int) -> dict:
    return {
        "detail": message,
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if isinstance(exc, ReservationConflict):
        # doit être absorbé par la re-résolution : ne jamais exposer le détail
        log.error("reservation conflict leaked to %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content=_body("Internal server error", 500))

    return JSONResponse(status_code=exc.status_code, content=_body(exc.message, exc.status_code))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
