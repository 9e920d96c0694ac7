"""
FastAPI ASGI entry point for Uvicorn
Creates the FastAPI app from the global settings
"""

from fulbo.api.main import create_fastapi_app
from fulbo.common.logging_utils import configure_logging
from fulbo.core.config import settings

configure_logging(service="api", level=settings.log_level, fmt=settings.log_format, log_file=settings.log_file_path)

app = create_fastapi_app(settings)
