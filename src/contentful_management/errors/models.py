"""Error payload model for Content Management API responses."""

from dataclasses import dataclass
from typing import Any


@dataclass
class ErrorDetail:
    """Error payload returned by the API.

    Error responses look like::

        {
            "sys": {"type": "Error", "id": "NotFound"},
            "message": "The resource could not be found.",
            "details": {"type": "Entry", "id": "nyancat"},
            "requestId": "4c2b2a7f-..."
        }
    """

    id: str | None = None  # Error identifier from sys.id, e.g. "VersionMismatch"
    message: str | None = None  # Human-readable explanation
    details: dict[str, Any] | None = None  # Extra, error-specific data
    request_id: str | None = None  # Server-side request id for support tickets

    @staticmethod
    def is_error_payload(data: Any) -> bool:
        """True if decoded JSON is an API error object."""
        return isinstance(data, dict) and isinstance(data.get("sys"), dict) and data["sys"].get("type") == "Error"

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> "ErrorDetail":
        """Build from an already decoded error payload."""
        sys = data.get("sys") or {}
        details = data.get("details")
        return cls(
            id=sys.get("id"),
            message=data.get("message"),
            details=details if isinstance(details, dict) else None,
            request_id=data.get("requestId"),
        )

    @property
    def validation_errors(self) -> list[dict[str, Any]]:
        """Per-field problems reported with ``ValidationFailed``."""
        if not self.details:
            return []
        errors = self.details.get("errors")
        return errors if isinstance(errors, list) else []

    def to_exception_message(self) -> str:
        """Convert the payload to an exception message."""
        lines = []

        if self.id and self.message:
            lines.append(f"{self.id}: {self.message}")
        elif self.message:
            lines.append(self.message)
        elif self.id:
            lines.append(self.id)

        if self.request_id:
            lines.append(f"Request ID: {self.request_id}")

        for error in self.validation_errors:
            name = error.get("name") or "error"
            path = error.get("path")
            location = ".".join(str(part) for part in path) if isinstance(path, list) else path
            line = f"  - {name}"
            if location:
                line += f" at {location}"
            if error.get("details"):
                line += f": {error['details']}"
            lines.append(line)

        return "\n".join(lines) if lines else "Unknown API error"
