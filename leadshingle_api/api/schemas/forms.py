from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from leadshingle_api.core.sanitize import sanitize, sanitize_optional
from leadshingle_api.services.invite_service import Attribution, Participant

# Every incoming field is trimmed and length-capped before anything else sees it.
CleanStr = Annotated[str, BeforeValidator(sanitize_optional)]
RequiredStr = Annotated[str, BeforeValidator(sanitize), Field(min_length=1)]


class _FormBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: RequiredStr
    email: RequiredStr
    phone: RequiredStr
    company: RequiredStr
    consent: bool = False

    # optional attribution
    page_url: CleanStr = ""
    referrer: CleanStr = ""
    utm_source: CleanStr = ""
    utm_medium: CleanStr = ""
    utm_campaign: CleanStr = ""
    utm_term: CleanStr = ""
    utm_content: CleanStr = ""
    cta: CleanStr = ""

    @model_validator(mode="after")
    def require_consent(self):
        if not self.consent:
            raise ValueError("consent is required")
        return self

    @property
    def participant(self) -> Participant:
        return Participant(name=self.name, email=self.email, phone=self.phone, company=self.company)

    @property
    def attribution(self) -> Attribution:
        return Attribution(
            page_url=self.page_url,
            referrer=self.referrer,
            utm_source=self.utm_source,
            utm_medium=self.utm_medium,
            utm_campaign=self.utm_campaign,
            utm_term=self.utm_term,
            utm_content=self.utm_content,
            cta=self.cta,
        )


class ContactRequest(_FormBase):
    website: RequiredStr
    service_area: RequiredStr
    message: CleanStr = ""


class BookingRequest(_FormBase):
    date: RequiredStr  # YYYY-MM-DD
    time_slot: RequiredStr  # HH:MM, 24h, Eastern


class ApiResponse(BaseModel):
    ok: bool
    error: str | None = None
