"""Domain-specific exceptions — framework-independent.

Every error carries a stable ``err_code`` token and the HTTP status the
presentation layer should answer with.
"""

from typing import Any


class ContentAdminError(Exception):
    """Base class for all errors raised by the content admin core."""

    err_code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ContentAdminError):
    """Raised when input to a mutating or listing call is malformed.

    ``errors`` holds field-level detail as ``{"field": ..., "message": ...}``
    dicts so the caller can point at the offending input.
    """

    err_code = "INVALID_PARAMETERS"
    status_code = 400

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        self.errors = errors or []
        super().__init__(message)


class NotFoundError(ContentAdminError):
    """Raised when an id does not exist or has been soft-deleted."""

    err_code = "RECORD_NOT_FOUND"
    status_code = 404

    def __init__(self, resource_key: str, entity_id: int | str):
        self.resource_key = resource_key
        self.entity_id = entity_id
        super().__init__(f"{resource_key} with id '{entity_id}' not found")


class UnknownResourceError(ContentAdminError):
    """Raised when a resource key has no registered descriptor."""

    err_code = "UNKNOWN_RESOURCE"
    status_code = 404

    def __init__(self, resource_key: str):
        self.resource_key = resource_key
        super().__init__(f"Unknown resource '{resource_key}'")


class InvalidIdListError(ContentAdminError):
    """Raised when a bulk id list is empty or holds non-positive-integer ids."""

    err_code = "INVALID_ID_LIST"
    status_code = 400

    def __init__(self, id_list: Any, reason: str):
        self.id_list = id_list
        self.reason = reason
        super().__init__(f"Invalid idList: {reason}")


class TranslationError(ContentAdminError):
    """Raised when a record cannot be translated between naming conventions."""

    err_code = "TRANSLATION_ERROR"
    status_code = 500


class AuditWriteError(ContentAdminError):
    """Raised when an audit entry cannot be persisted.

    Never surfaced to API callers; the audit writer logs it and moves on.
    """

    err_code = "AUDIT_WRITE_FAILED"

    def __init__(self, biz_type: str, data_id: int | None, reason: str):
        self.biz_type = biz_type
        self.data_id = data_id
        self.reason = reason
        super().__init__(f"Audit write failed for {biz_type}#{data_id}: {reason}")
