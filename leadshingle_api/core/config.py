from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from the project root so it loads regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # CORS: the single marketing site origin allowed to post forms
    allow_origin: str = "https://leadshingle.com"

    # Email identities
    from_email: str = "Support <support@leadshingle.com>"
    contact_destination: str = "support@leadshingle.com"
    organizer_email: str = "support@leadshingle.com"
    organizer_name: str = "LeadShingle Demos"

    # Resend transport (preferred). Leave empty to fall back to SMTP.
    resend_api_key: str = ""

    # SMTP transport. Leave smtp_host empty to disable.
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""

    @property
    def smtp_enabled(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_password)

    @property
    def email_enabled(self) -> bool:
        return bool(self.resend_api_key) or self.smtp_enabled
