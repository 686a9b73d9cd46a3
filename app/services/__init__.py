"""
Services module - upstream Odoo calls.

Every outbound request goes through the JSON-RPC client in `odoo`.
"""

from app.services import odoo, contacts

__all__ = ["odoo", "contacts"]
