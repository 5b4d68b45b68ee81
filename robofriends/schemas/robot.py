"""
RoboFriends — Pydantic Request/Response Schemas
=================================================

What:  Pydantic models defining the API contract between client and service.
Why:   Automatic serialization, OpenAPI docs, and one shared definition of
       the wire format for both the service and robofriends.client.
How:   Field names are snake_case in Python and camelCase on the wire
       (`style_type` <-> `styleType`) through aliases.

Why RobotCreate fields are all optional:
    The contract for a missing field is 400 {"msg": "Please enter all fields"},
    not FastAPI's automatic 422. Presence and emptiness are checked by
    RobotService, so the schema only enforces "string if present".
"""

from datetime import datetime
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class RobotCreate(BaseModel):
    """Body of POST /api/robots. All six fields are required by the service."""

    name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    image: Optional[str] = None
    style_type: Optional[str] = Field(default=None, alias="styleType")

    model_config = ConfigDict(populate_by_name=True)

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "username", "email", "phone", "image", "style_type")

    def missing_fields(self) -> List[str]:
        """Names (wire aliases) of required fields that are absent or empty."""
        missing = []
        for field_name in self.REQUIRED_FIELDS:
            if not getattr(self, field_name):
                info = type(self).model_fields[field_name]
                missing.append(info.alias or field_name)
        return missing


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class RobotResponse(BaseModel):
    """
    A stored robot record, exactly as persisted.

    Returned by GET /api/robots (as array items) and POST /api/robots (201).
    """

    id: int = Field(description="Store-assigned identifier")
    name: str
    username: str
    email: str
    phone: str
    image: str = Field(description="Avatar image URL")
    style_type: str = Field(alias="styleType", description="Avatar style key")
    created_at: Optional[datetime] = Field(
        default=None,
        alias="createdAt",
        description="When the record was created (UTC)",
    )

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class PhoneCheckResponse(BaseModel):
    """Result of GET /api/robots/check-phone/{phone}."""

    exists: bool = Field(description="True iff a robot has exactly this phone string")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ClientErrorResponse(BaseModel):
    """
    400 body. `msg` is shown to the user; `code` lets clients tell a missing
    field (validation_error) from a uniqueness conflict (duplicate_robot).
    """

    msg: str
    code: str
    request_id: Optional[str] = None


class ServerErrorResponse(BaseModel):
    """500 body. `error` is a generic, operation-level message."""

    error: str
    request_id: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
