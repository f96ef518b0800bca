class InvalidPhoneNumberError(ValueError):
    """Raised when a phone number is not E.164 digits without the leading '+'."""

    def __init__(self, phone):
        self.phone = phone
        super().__init__(f"Invalid phone number format: {phone}")


class PersistenceError(Exception):
    """Base class for click store failures."""


class StoreNotInitializedError(PersistenceError):
    def __init__(self):
        super().__init__("Database not initialized")


class DuplicateClickError(PersistenceError):
    """A click with this cid is already stored. Stores never overwrite."""

    def __init__(self, cid: str):
        self.cid = cid
        super().__init__(f"Click already exists for cid: {cid}")
