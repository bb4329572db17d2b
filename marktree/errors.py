from __future__ import annotations


class BookmarkError(RuntimeError):
    """Base class for every error the bookmark manager raises."""

    name = "BookmarkError"

    def __init__(self, message: str = ""):
        super().__init__(message or self.name)
        self.message = message or self.name


class SecurityError(BookmarkError):
    name = "SecurityError"


class NotFoundError(BookmarkError):
    name = "NotFoundError"


class DuplicateError(BookmarkError):
    name = "DuplicateError"


class TypeMismatchError(BookmarkError):
    name = "TypeMismatchError"


class ValidationError(BookmarkError):
    name = "ValidationError"


class StorageError(BookmarkError):
    name = "StorageError"
