"""
FastAPI proxy application: forwards authenticate, create-contact and
list-contacts to the upstream Odoo JSON-RPC endpoint.
"""
import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.deps import OdooDep, SettingsDep
from app.schemas import (
    ContactIn,
    ContactCreatedOut,
    ErrorResponse,
    HealthStatus,
    NotFoundResponse,
    ServiceInfo,
)
from app.services.contacts import create_contact, search_contacts


settings = get_settings()


def _log_unhandled(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    """Event loop hook for failures nobody awaited."""
    print(f"❌ Unhandled async error: {context.get('message')} {context.get('exception')!r}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    # Startup
    print("🚀 Backend Proxy Starting")
    print(f"Odoo URL: {settings.ODOO_URL}")
    print(f"Database: {settings.ODOO_DATABASE}")
    print(f"Environment: {settings.ENVIRONMENT}")

    asyncio.get_running_loop().set_exception_handler(_log_unhandled)

    print(f"✓ Backend proxy running on port {settings.PORT}")
    print(f"Health check: http://localhost:{settings.PORT}/health")
    print(f"API docs: http://localhost:{settings.PORT}/")

    yield

    # Shutdown
    print("👋 Shutting down...")


app = FastAPI(
    title="Odoo API Proxy",
    version="0.1.0",
    description="Forwards contact operations to Odoo JSON-RPC with fixed credentials",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    redirect_slashes=False,
)


# === Middleware ===

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Exception Handlers ===

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown paths and unsupported methods both answer 404."""
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content=NotFoundResponse(path=request.url.path).model_dump(),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(exclude_none=True),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    print(f"❌ Unhandled error on {request.url.path}: {exc!r}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": str(exc)},
    )


def _error(status_code: int, error: str, message: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(exclude_none=True),
    )


def _utc_timestamp() -> str:
    """ISO-8601 UTC with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def _read_contact(request: Request) -> Optional[ContactIn]:
    """Parse the create-contact body; None when it is not a usable object."""
    try:
        data = await request.json()
    except ValueError:
        return None

    if not isinstance(data, dict):
        return None

    try:
        return ContactIn.model_validate(data)
    except ValidationError:
        return None


# === Service Endpoints ===

@app.api_route("/", methods=["GET", "HEAD"])
async def root():
    """Describe the available endpoints."""
    return ServiceInfo().model_dump()


@app.api_route("/health", methods=["GET", "HEAD"])
async def health_check(settings: SettingsDep):
    """Report the configured upstream; never contacts it."""
    return HealthStatus(
        odoo_url=settings.ODOO_URL,
        timestamp=_utc_timestamp(),
    ).model_dump()


# === Odoo Endpoints ===

@app.post("/api/authenticate")
async def authenticate(odoo: OdooDep):
    """
    Authenticate with the configured credentials.

    The upstream envelope is relayed as received, with or without a uid.
    """
    try:
        print("📝 Authenticating...")
        reply = await odoo.authenticate()
        print("✓ Auth successful")
    except Exception as e:
        print(f"❌ Auth error: {e}")
        return _error(500, "Authentication failed", str(e))

    return Response(content=reply.content, media_type="application/json")


@app.post("/api/create-contact")
async def create_contact_endpoint(request: Request, odoo: OdooDep):
    """
    Create a contact after a fresh authentication.

    Status codes:
    - 400: name or phone missing, nothing sent upstream
    - 401: upstream returned no uid
    - 500: upstream error envelope or transport failure
    """
    contact = await _read_contact(request)
    if contact is None or not contact.is_complete:
        print("❌ Create rejected: name and phone are required")
        return _error(400, "Name and phone are required")

    print(f"📝 Creating contact: name={contact.name!r} phone={contact.phone!r}")

    try:
        print("  Authenticating...")
        auth = await odoo.authenticate()
        if not auth.uid:
            print("❌ Auth failed")
            return _error(401, "Authentication failed")
        print("✓ Auth successful")

        print("  Creating contact in Odoo...")
        reply = await create_contact(odoo, contact.name, contact.phone)
    except Exception as e:
        print(f"❌ Create error: {e}")
        return _error(500, "Failed to create contact", str(e))

    if not reply.body.result:
        print(f"❌ Create failed: {reply.body.error}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to create contact", "details": reply.body.error},
        )

    print(f"✓ Contact created: {reply.body.result}")
    return ContactCreatedOut(
        result=reply.body.result,
        message=f"Contact {contact.name} created successfully!",
    ).model_dump()


@app.api_route("/api/contacts", methods=["GET", "HEAD"])
async def fetch_contacts(odoo: OdooDep):
    """Fetch contacts after a fresh authentication; relays the upstream envelope."""
    try:
        print("📋 Fetching contacts...")
        auth = await odoo.authenticate()
        if not auth.uid:
            print("❌ Auth failed")
            return _error(401, "Authentication failed")

        reply = await search_contacts(odoo)
    except Exception as e:
        print(f"❌ Fetch error: {e}")
        return _error(500, "Failed to fetch contacts", str(e))

    print("✓ Fetched contacts")
    return Response(content=reply.content, media_type="application/json")


def run() -> None:
    """Serve the application with uvicorn on the configured address."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level="info",
    )


if __name__ == "__main__":
    run()
