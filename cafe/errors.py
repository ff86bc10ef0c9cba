"""
Error taxonomy shared by the services and the blueprints.

Every error carries the HTTP status the blueprints answer with, so a route only
has to catch CafeError and return ``to_dict()`` with ``status_code``.
"""


class CafeError(Exception):
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__

    def to_dict(self):
        return {"status": "error", "message": self.message}


class ValidationError(CafeError):
    status_code = 400


class InvalidCredentials(CafeError):
    status_code = 401

    def __init__(self, message="Invalid credentials"):
        super().__init__(message)


class Unauthorized(CafeError):
    status_code = 401

    def __init__(self, message="Authorization required"):
        super().__init__(message)


class AccountPending(CafeError):
    status_code = 403

    def __init__(
        self,
        message="Account Pending: your account requires approval from a super admin.",
    ):
        super().__init__(message)


class Forbidden(CafeError):
    status_code = 403

    def __init__(self, message="You do not have access to this resource"):
        super().__init__(message)


class NotFound(CafeError):
    status_code = 404


class NoCapacity(CafeError):
    status_code = 409

    def __init__(
        self,
        message="Sorry, there are no tables available for the selected time and party size.",
    ):
        super().__init__(message)


class SlotTaken(NoCapacity):
    """The chosen table was booked for the same slot by a concurrent request."""


class InvalidTransition(CafeError):
    status_code = 409

    def __init__(self, current, target, kind="reservation"):
        super().__init__(f"Cannot change {kind} status from '{current}' to '{target}'")
        self.current = current
        self.target = target
