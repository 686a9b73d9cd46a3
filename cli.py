#!/usr/bin/env python3
"""
Odoo Proxy CLI - Command-line interface for common operations.

Usage:
    python cli.py serve                        # Run the proxy server
    python cli.py health                       # Show configuration
    python cli.py authenticate                 # Authenticate against Odoo
    python cli.py contacts                     # List contacts
    python cli.py create-contact NAME PHONE    # Create a contact
"""
import sys
import asyncio

from app.config import get_settings
from app.services.contacts import create_contact, search_contacts
from app.services.odoo import OdooClient


def print_header(text: str):
    """Print formatted header."""
    print(f"\n{'=' * 60}")
    print(f"  {text}")
    print(f"{'=' * 60}\n")


def print_status(key: str, value: object, indent: int = 0):
    """Print formatted status line."""
    spaces = "  " * indent
    print(f"{spaces}{key:30s}: {value}")


def cmd_serve():
    """Run the proxy with uvicorn."""
    from app.main import run
    run()


async def cmd_health() -> int:
    """Show the active configuration."""
    print_header("Proxy Configuration")

    settings = get_settings()

    print("Upstream:")
    print_status("Odoo URL", settings.ODOO_URL, 1)
    print_status("Database", settings.ODOO_DATABASE, 1)
    print_status("Login", settings.ODOO_USERNAME, 1)
    print_status("Password", "✓ Set" if settings.ODOO_PASSWORD else "✗ Not set", 1)
    print_status("Timeout (s)", settings.UPSTREAM_TIMEOUT_SECONDS, 1)

    print("\nServer:")
    print_status("Listen", f"{settings.HOST}:{settings.PORT}", 1)
    print_status("Environment", settings.ENVIRONMENT, 1)
    print_status("Allowed Origins", ", ".join(settings.ALLOWED_ORIGINS), 1)

    print()
    return 0


async def cmd_authenticate() -> int:
    """Authenticate and show the uid."""
    print_header("Authenticating")

    async with OdooClient() as odoo:
        reply = await odoo.authenticate()

    if not reply.uid:
        print(f"✗ Authentication failed: {reply.body.error}")
        return 1

    print("✓ Authenticated\n")
    print_status("UID", reply.uid)
    print()
    return 0


async def cmd_contacts() -> int:
    """List contacts."""
    print_header("Contacts")

    async with OdooClient() as odoo:
        auth = await odoo.authenticate()
        if not auth.uid:
            print("✗ Authentication failed")
            return 1
        reply = await search_contacts(odoo)

    if reply.body.error:
        print(f"✗ Failed: {reply.body.error}")
        return 1

    records = reply.body.result or []
    for record in records:
        print(
            f"  {str(record.get('id')):>6}  {record.get('name') or '':30s}  "
            f"{record.get('email') or '-':30s}  {record.get('phone') or '-'}"
        )
    print(f"\n{len(records)} contact(s)\n")
    return 0


async def cmd_create_contact(name: str, phone: str) -> int:
    """Create a contact."""
    print_header("Creating Contact")

    async with OdooClient() as odoo:
        auth = await odoo.authenticate()
        if not auth.uid:
            print("✗ Authentication failed")
            return 1
        reply = await create_contact(odoo, name, phone)

    if not reply.body.result:
        print(f"✗ Failed: {reply.body.error}")
        return 1

    print(f"✓ Contact {name} created successfully!\n")
    print_status("ID", reply.body.result)
    print()
    return 0


def print_help():
    """Print help message."""
    print("""
Odoo Proxy CLI

Usage:
    python cli.py <command> [options]

Commands:
    serve                        Run the proxy server
    health                       Show configuration
    authenticate                 Authenticate against Odoo
    contacts                     List contacts
    create-contact NAME PHONE    Create a contact
    help                         Show this help message

Examples:
    python cli.py serve
    python cli.py contacts
    python cli.py create-contact "Jane Doe" "+1 555 0100"
""")


async def main() -> int:
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print_help()
        return 0

    command = sys.argv[1].lower()

    if command == "health":
        return await cmd_health()
    elif command == "authenticate":
        return await cmd_authenticate()
    elif command == "contacts":
        return await cmd_contacts()
    elif command == "create-contact":
        if len(sys.argv) < 4 or not sys.argv[2] or not sys.argv[3]:
            print("Name and phone are required")
            return 1
        return await cmd_create_contact(sys.argv[2], sys.argv[3])
    elif command == "help":
        print_help()
        return 0

    print(f"Unknown command: {command}")
    print_help()
    return 1


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1].lower() == "serve":
        cmd_serve()
        sys.exit(0)

    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        print(f"\n✗ Error: {e}")
        sys.exit(1)
