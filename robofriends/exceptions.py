"""
RoboFriends — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the Directory Service.
Why:   Custom exceptions enable targeted error handling with the status codes
       and body shapes the front end expects, without try/except in routes.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) translate them.
Who:   Raised by RobotService; caught by the global handlers.

Exception Hierarchy:
    RoboFriendsError (base)
    ├── ValidationError       → 400 {"msg": ...}   (client can fix)
    ├── DuplicateRobotError   → 400 {"msg": ...}   (unique field reused)
    └── DatabaseError         → 500 {"error": ...} (details logged only)
"""

from typing import Any, Dict, Optional

MISSING_FIELDS_MESSAGE = "Please enter all fields"
DUPLICATE_ROBOT_MESSAGE = (
    "A robot with this email, username, or phone number already exists."
)


class RoboFriendsError(Exception):
    """
    Base exception for all RoboFriends application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(RoboFriendsError):
    """
    Raised when a create request is missing one of the required fields.

    HTTP: 400 Bad Request, body {"msg": "Please enter all fields"}
    """

    def __init__(
        self,
        message: str = MISSING_FIELDS_MESSAGE,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DuplicateRobotError(RoboFriendsError):
    """
    Raised when the store rejects a robot because its username, email or
    phone is already taken.

    The message is fixed: the store does not reliably report which
    constraint failed, and the front end shows the text as-is.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=DUPLICATE_ROBOT_MESSAGE, context=context)


class DatabaseError(RoboFriendsError):
    """
    Raised when a store operation fails unexpectedly.

    HTTP: 500 Internal Server Error. The message is generic and names the
    operation; driver details go to the log only.
    """

    def __init__(
        self,
        message: str = "Server error while accessing the robot store.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
