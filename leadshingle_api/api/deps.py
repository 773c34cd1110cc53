import json
from urllib.parse import parse_qsl

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from leadshingle_api.core.config import Settings
from leadshingle_api.core.errors import ConfigurationError, ValidationError
from leadshingle_api.core.sanitize import sanitize
from leadshingle_api.services.email_service import EmailSender
from leadshingle_api.services.email_templates import ClientMeta


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_email_sender(request: Request) -> EmailSender | None:
    return request.app.state.email_sender


def require_email_sender(sender: EmailSender | None) -> EmailSender:
    if sender is None:
        raise ConfigurationError()
    return sender


def get_client_meta(request: Request) -> ClientMeta:
    forwarded = request.headers.get("x-forwarded-for")
    peer = request.client.host if request.client else ""
    return ClientMeta(
        ip=sanitize(forwarded or peer),
        user_agent=sanitize(request.headers.get("user-agent")),
    )


async def read_form_body(request: Request) -> dict:
    """JSON body, with a fallback to urlencoded form data for non-JSON posts."""
    raw = (await request.body()).decode("utf-8", errors="replace")
    content_type = request.headers.get("content-type", "").lower()
    try:
        data = json.loads(raw) if raw.strip() else {}
    except ValueError:
        if "application/json" in content_type:
            return {}
        data = dict(parse_qsl(raw, keep_blank_values=True))
    return data if isinstance(data, dict) else {}


def parse_form(model, data: dict):
    """Validate a sanitized form model; any failure is a generic 400."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError() from e
