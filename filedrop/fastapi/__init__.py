"""FastAPI integration for filedrop."""

from filedrop.fastapi.app import create_filedrop_app
from filedrop.fastapi.error_handlers import register_error_handlers

__all__ = ["create_filedrop_app", "register_error_handlers"]
