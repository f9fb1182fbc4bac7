"""Booking provider configuration model and the initiation dispatcher."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from urllib.parse import quote
import re

PROVIDER_SALONIZED = "salonized"
PROVIDER_TREATWELL = "treatwell"
PROVIDER_WHATSAPP = "whatsapp"
VALID_PROVIDERS = (None, PROVIDER_SALONIZED, PROVIDER_TREATWELL, PROVIDER_WHATSAPP)

DEFAULT_TREATWELL_URL = "https://www.treatwell.com"
FALLBACK_URL = "#contact"
NO_PROVIDER_MESSAGE = "No booking provider configured. Please contact us directly."
MISCONFIGURED_MESSAGE = "Booking provider not properly configured."

WHATSAPP_GREETING = "Hi! I would like to book an appointment."
WHATSAPP_CLOSING = "Please let me know if this works for you or suggest alternative times. Thank you!"

_NON_DIGITS = re.compile(r"[^0-9]")
# Characters encodeURIComponent leaves untouched besides [A-Za-z0-9_.-~].
_URI_COMPONENT_SAFE = "!*'()"


def is_valid_provider(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value in VALID_PROVIDERS)


@dataclass
class BookingConfig:
    """The single active booking provider and its settings."""

    provider: Optional[str] = None
    settings: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "BookingConfig":
        data = data if isinstance(data, Mapping) else {}
        settings = data.get("settings")
        return cls(provider=data.get("provider"), settings=dict(settings) if isinstance(settings, Mapping) else {})

    def to_dict(self) -> dict:
        return {"provider": self.provider, "settings": dict(self.settings)}

    def setting(self, key: str) -> str:
        value = self.settings.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value if isinstance(value, str) else ""


@dataclass
class BookingRequest:
    """What the visitor asked for; every field is optional free text."""

    service: Optional[str] = None
    stylist: Optional[str] = None
    preferred_date: Optional[str] = None
    preferred_time: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "BookingRequest":
        payload = payload if isinstance(payload, Mapping) else {}

        def _text(key: str) -> Optional[str]:
            value = payload.get(key)
            if value is None or isinstance(value, (dict, list)):
                return None
            return str(value)

        return cls(
            service=_text("service"),
            stylist=_text("stylist"),
            preferred_date=_text("preferredDate"),
            preferred_time=_text("preferredTime"),
        )

    def params(self) -> dict:
        return {
            "service": self.service,
            "stylist": self.stylist,
            "preferredDate": self.preferred_date,
            "preferredTime": self.preferred_time,
        }


def whatsapp_message(request: BookingRequest) -> str:
    message = WHATSAPP_GREETING
    if request.service:
        message += f"\n\nService: {request.service}"
    if request.stylist:
        message += f"\nStylist: {request.stylist}"
    if request.preferred_date:
        message += f"\nPreferred Date: {request.preferred_date}"
    if request.preferred_time:
        message += f"\nPreferred Time: {request.preferred_time}"
    message += f"\n\n{WHATSAPP_CLOSING}"
    return message


def whatsapp_url(phone_number: str, message: str) -> str:
    digits = _NON_DIGITS.sub("", phone_number or "")
    return f"https://wa.me/{digits}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"


def dispatch(config: BookingConfig, request: BookingRequest) -> dict:
    """Map (config, request) onto the action payload the front end acts on.

    Never raises: missing settings degrade to empty strings and an unknown
    provider falls back to the contact section.
    """
    provider = config.provider
    if not provider:
        return {"action": "fallback", "message": NO_PROVIDER_MESSAGE, "fallbackUrl": FALLBACK_URL}

    if provider == PROVIDER_SALONIZED:
        return {
            "action": "embed",
            "provider": PROVIDER_SALONIZED,
            "embedScript": config.setting("embedScript"),
            "params": request.params(),
        }

    if provider == PROVIDER_TREATWELL:
        return {
            "action": "link",
            "provider": PROVIDER_TREATWELL,
            "url": config.setting("bookingUrl") or DEFAULT_TREATWELL_URL,
            "params": request.params(),
        }

    if provider == PROVIDER_WHATSAPP:
        message = whatsapp_message(request)
        return {
            "action": "whatsapp",
            "provider": PROVIDER_WHATSAPP,
            "url": whatsapp_url(config.setting("phoneNumber"), message),
            "message": message,
        }

    return {"action": "fallback", "message": MISCONFIGURED_MESSAGE, "fallbackUrl": FALLBACK_URL}
