"""Booking provider configuration and initiation."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from hairportal.core.errors import ValidationError
from hairportal.domain.booking import BookingConfig, BookingRequest, dispatch, is_valid_provider
from hairportal.repositories import BOOKING_CONFIG, DocumentStore, open_store

logger = logging.getLogger(__name__)

INVALID_PROVIDER = "Invalid provider. Must be one of: salonized, treatwell, whatsapp, or null"


class BookingService:
    """Keeps the singleton BookingConfig and answers initiation requests."""

    def __init__(self, store: Optional[DocumentStore] = None) -> None:
        self.store = store or open_store(BOOKING_CONFIG, BookingConfig().to_dict())

    def get_config(self) -> BookingConfig:
        """Current config, normalised to ``provider`` and ``settings`` (other keys are dropped)."""
        return BookingConfig.from_dict(self.store.load())

    def set_config(self, payload: Any) -> BookingConfig:
        # "provider" must be sent explicitly; only an explicit null clears it.
        if not isinstance(payload, Mapping) or "provider" not in payload:
            raise ValidationError(INVALID_PROVIDER)
        provider = payload["provider"]
        if not is_valid_provider(provider):
            raise ValidationError(INVALID_PROVIDER)
        settings = payload.get("settings")
        if settings is None:
            settings = {}
        if not isinstance(settings, Mapping):
            raise ValidationError("settings must be an object")
        config = BookingConfig(provider=provider, settings=dict(settings))
        self.store.save(config.to_dict())
        logger.info("Booking provider set to %s", provider or "none")
        return config

    def initiate(self, payload: Any, config: Optional[BookingConfig] = None) -> dict:
        """Build the action payload; ``config`` overrides the stored one when given."""
        current = config if config is not None else self.get_config()
        return dispatch(current, BookingRequest.from_payload(payload))
