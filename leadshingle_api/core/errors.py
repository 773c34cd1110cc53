"""Errors raised by the request handlers.

Every error carries the HTTP status and the short message that is safe to
return to the browser. The app-level exception handler renders them as
``{"ok": false, "error": message}``.
"""


class ApiError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    message = "Missing required fields or consent"


class SlotRejectedError(ApiError):
    """The requested demo slot failed a scheduling rule."""

    status_code = 400

    def __init__(self, reason) -> None:
        self.reason = reason
        super().__init__(reason.value)


class ConfigurationError(ApiError):
    status_code = 500
    message = "Missing RESEND_API_KEY"


class DispatchError(ApiError):
    """An outbound email failed.

    ``delivered`` lists the sends that completed before the failure. They are
    not rolled back.
    """

    status_code = 500
    message = "Email send failed"

    def __init__(self, message: str | None = None, delivered: list[str] | None = None) -> None:
        self.delivered = list(delivered or [])
        super().__init__(message)
