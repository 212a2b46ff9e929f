from fastapi import FastAPI

from backend.app.api.errors import register_error_handlers
from backend.app.api.v1.router import router as v1_router
from backend.app.core.config import get_settings
from backend.app.core.logging import setup_logging

setup_logging(get_settings().LOG_LEVEL)

app = FastAPI(title="Vendor OMS", version="0.1.0")
register_error_handlers(app)
app.include_router(v1_router, prefix="/v1")
