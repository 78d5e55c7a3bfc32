from typing import Any, Dict, List, Optional

from fastapi import status


class KanbanError(Exception):
    """Base class for errors raised by the service layer"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"detail": self.message}


class ValidationError(KanbanError):
    """Malformed or missing input, reported as a list of field messages"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_payload(self) -> Dict[str, Any]:
        return {"detail": self.message, "errors": self.errors}


class NotFoundError(KanbanError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthorizationError(KanbanError):
    status_code = status.HTTP_403_FORBIDDEN


class TransactionAbortError(KanbanError):
    """Raised after a transaction was rolled back because of an unexpected failure"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    def to_payload(self) -> Dict[str, Any]:
        return {
            "detail": self.message,
            "error": str(self.cause) if self.cause is not None else None,
        }
