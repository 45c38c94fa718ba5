from __future__ import annotations

from typing import Any, Optional


class GalleryError(Exception):
    """Base class for errors raised by gallery services.

    ``status_code`` is the HTTP status the API layer answers with; ``details``
    are merged into the JSON error body next to ``message``.
    """

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(GalleryError):
    status_code = 404

    def __init__(self, resource: str, identifier: object | None = None) -> None:
        message = f"{resource} not found" if identifier is None else f"{resource} {identifier} not found"
        super().__init__(message)
        self.resource = resource
        self.identifier = identifier


class ValidationFailedError(GalleryError):
    status_code = 400


class ConflictError(GalleryError):
    status_code = 400


class InvalidTransitionError(GalleryError):
    status_code = 400

    def __init__(self, entity: str, current: str, target: str) -> None:
        super().__init__(
            f"Cannot move {entity} from '{current}' to '{target}'",
            details={"current_status": current, "requested_status": target},
        )
        self.current = current
        self.target = target


class AuthenticationError(GalleryError):
    status_code = 401


class TwoFactorRequiredError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Two-factor authentication code required", details={"requires_two_factor": True})


class PermissionDeniedError(GalleryError):
    status_code = 403
