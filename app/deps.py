"""
Dependency injection for FastAPI routes.
Provides settings and the per-request upstream client.
"""
from typing import Annotated, AsyncIterator
from fastapi import Depends

from app.config import Settings, get_settings
from app.services.odoo import OdooClient


# === Upstream Client Dependencies ===

async def get_odoo_client() -> AsyncIterator[OdooClient]:
    """
    Odoo client scoped to a single inbound request.

    A fresh client means a fresh cookie jar, so the session opened by the
    authenticate call is only reused by the call that follows it.

    Usage:
        @app.get("/api/contacts")
        async def contacts(odoo: OdooClient = Depends(get_odoo_client)):
            auth = await odoo.authenticate()
    """
    async with OdooClient(get_settings()) as client:
        yield client


# === Type Aliases ===

OdooDep = Annotated[OdooClient, Depends(get_odoo_client)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
