"""
Slim Pydantic schemas for the proxy surface and the upstream JSON-RPC envelopes.

Design principles:
- Inbound bodies are validated before any upstream call
- Upstream envelopes are parsed for decisions, relayed as received
- Credentials never appear in an output schema
"""
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr


# === JSON-RPC Envelopes ===

class JsonRpcRequest(BaseModel):
    """Outbound JSON-RPC 2.0 call."""
    jsonrpc: str = "2.0"
    method: str = "call"
    params: dict[str, Any] = Field(default_factory=dict)
    id: Optional[int] = None


class JsonRpcResponse(BaseModel):
    """
    Upstream reply: carries either `result` or `error`.

    Unknown keys are kept so the envelope can be inspected as received.
    """
    model_config = ConfigDict(extra="allow")

    jsonrpc: Optional[str] = None
    id: Optional[Any] = None
    result: Optional[Any] = None
    error: Optional[Any] = None

    @property
    def uid(self) -> Optional[Any]:
        """Authenticated user id, when the result is a session info object."""
        if isinstance(self.result, dict):
            return self.result.get("uid") or None
        return None


# === Contact Schemas ===

# Values forwarded to Odoo unchanged; objects and arrays are rejected
JsonScalar = Union[StrictStr, StrictInt, StrictFloat, StrictBool]


class ContactIn(BaseModel):
    """Input schema for contact creation."""
    name: Optional[JsonScalar] = None
    phone: Optional[JsonScalar] = None

    @property
    def is_complete(self) -> bool:
        """Both fields present and truthy (empty string, 0 and false are missing)."""
        return bool(self.name) and bool(self.phone)


class ContactCreatedOut(BaseModel):
    """Response after the upstream created a contact."""
    success: bool = True
    result: Any
    message: str


# === Service Schemas ===

class EndpointMap(BaseModel):
    health: str = "/health"
    authenticate: str = "POST /api/authenticate"
    create_contact: str = "POST /api/create-contact"
    fetch_contacts: str = "GET /api/contacts"


class ServiceInfo(BaseModel):
    """Static description of the proxy."""
    status: str = "running"
    message: str = "Odoo API Proxy Server"
    endpoints: EndpointMap = Field(default_factory=EndpointMap)


class HealthStatus(BaseModel):
    """Liveness info; no upstream call is made to build it."""
    status: str = "running"
    odoo_url: str
    timestamp: str


# === Error Schemas ===

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    message: Optional[str] = None


class NotFoundResponse(BaseModel):
    error: str = "Not found"
    message: str = "This endpoint does not exist"
    path: str
