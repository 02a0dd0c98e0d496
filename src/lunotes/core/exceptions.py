"""Domain exceptions raised by the note and category stores."""


class LunotesError(Exception):
    """Base class for errors the stores surface to callers."""


class ProtectedCategoryError(LunotesError):
    """Raised when deleting one of the built-in categories."""

    def __init__(self, category_id: str) -> None:
        super().__init__(f"Category '{category_id}' is built in and cannot be deleted")
        self.category_id = category_id


class PersistenceError(LunotesError):
    """Raised by a repository when the backing store cannot be read or written."""
