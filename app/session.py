"""
Process-wide record of the last authenticated Odoo uid.

Write-only from the request path: nothing reads it to decide whether to
authenticate, so concurrent writers may overwrite each other freely.
"""
from datetime import datetime, timezone
from typing import Any, Optional


class SessionMarker:
    """Last-seen uid and when it was recorded."""

    def __init__(self):
        self.uid: Optional[Any] = None
        self.recorded_at: Optional[datetime] = None

    def record(self, uid: Any) -> None:
        self.uid = uid
        self.recorded_at = datetime.now(timezone.utc)

    def clear(self) -> None:
        self.uid = None
        self.recorded_at = None


session_marker = SessionMarker()
