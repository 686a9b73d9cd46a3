"""
Contact operations on the Odoo `res.partner` model.
"""
from typing import Any, Optional

from app.services.odoo import OdooClient, OdooReply


CONTACT_MODEL = "res.partner"
CONTACT_FIELDS = ["id", "name", "email", "phone"]


async def create_contact(odoo: OdooClient, name: Any, phone: Any) -> OdooReply:
    """Create one partner; a successful reply carries the new id as `result`."""
    return await odoo.call_kw(
        CONTACT_MODEL,
        "create",
        [{"name": name, "phone": phone}],
    )


async def search_contacts(odoo: OdooClient, limit: Optional[int] = None) -> OdooReply:
    """
    Read partners with an empty domain.

    Args:
        odoo: Authenticated client
        limit: Max records (uses config default if None)
    """
    if limit is None:
        limit = odoo.settings.CONTACTS_FETCH_LIMIT

    return await odoo.call_kw(
        CONTACT_MODEL,
        "search_read",
        [[]],
        {"fields": CONTACT_FIELDS, "limit": limit},
    )
