from fastapi import Depends, HTTPException
from fastapi.requests import HTTPConnection

from config.context import AppContext
from config.settings import ConfigurationError, Settings
from database.db_manager import DatabaseManager


def get_settings(conn: HTTPConnection) -> Settings:
    """FastAPI dependency that provides the process settings."""
    return conn.app.state.settings


async def get_context(conn: HTTPConnection) -> AppContext:
    """FastAPI dependency that provides the AppContext, resolving it on first use."""
    try:
        return await conn.app.state.bootstrap.get()
    except ConfigurationError as e:
        raise HTTPException(503, str(e))


async def get_db(context: AppContext = Depends(get_context)) -> DatabaseManager:
    """FastAPI dependency that provides the DatabaseManager."""
    return context.db
