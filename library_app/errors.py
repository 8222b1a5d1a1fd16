"""Domain errors raised by the services and mapped to HTTP responses by the controllers."""


class LibraryError(Exception):
    kind = "error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message, "error": self.kind}


class ValidationError(LibraryError):
    kind = "validation"
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    @classmethod
    def from_field_error(cls, err):
        return cls(err.field, err.message)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["field"] = self.field
        return data


class NotFound(LibraryError):
    kind = "not_found"
    status_code = 404
    entity = "Record"

    def __init__(self, entity_id=None, message: str = None):
        super().__init__(message or f"{self.entity} not found")
        self.entity_id = entity_id


class BookNotFound(NotFound):
    entity = "Book"


class BorrowingNotFound(NotFound):
    entity = "Borrowing record"


class UserNotFound(NotFound):
    entity = "User"


class Conflict(LibraryError):
    kind = "conflict"
    status_code = 400


class AlreadyBorrowed(Conflict):
    def __init__(self):
        super().__init__(
            "You already have an active borrowing for this book. "
            "Please return it before borrowing again."
        )


class AlreadyReturned(Conflict):
    def __init__(self):
        super().__init__("Book already returned")


class EmailTaken(Conflict):
    def __init__(self):
        super().__init__("Email is already registered")


class BookInUse(Conflict):
    pass


class Unavailable(LibraryError):
    kind = "unavailable"
    status_code = 400


class NoCopiesAvailable(Unavailable):
    def __init__(self):
        super().__init__("No copies available")


class Forbidden(LibraryError):
    kind = "forbidden"
    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class Unauthorized(LibraryError):
    kind = "unauthorized"
    status_code = 401


class InvalidCredentials(Unauthorized):
    def __init__(self):
        super().__init__("Invalid email or password")


class StorageError(LibraryError):
    kind = "storage"
    status_code = 500

    def __init__(self, action: str, detail: str = None):
        super().__init__(f"Failed to {action}")
        # underlying driver message, kept for logs only
        self.detail = detail
