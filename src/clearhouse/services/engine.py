"""Wires the engine components from settings."""

from __future__ import annotations

from dataclasses import dataclass

from clearhouse.calendar.business_days import BusinessDayCalendar
from clearhouse.calendar.effective_dates import EffectiveDatePolicy
from clearhouse.core.config import AppSettings
from clearhouse.core.exceptions import ConfigurationError
from clearhouse.core.protocols import IFileStore, IHolidayProvider
from clearhouse.nacha.encoder import NACHAEncoder
from clearhouse.nacha.validator import NACHAValidator
from clearhouse.security.envelope import SecureEnvelope
from clearhouse.services.generation import NACHAGenerationService
from clearhouse.services.holiday_service import HolidayService


@dataclass
class Engine:
    """One set of collaborating components sharing a single calendar."""

    calendar: BusinessDayCalendar
    policy: EffectiveDatePolicy
    encoder: NACHAEncoder
    validator: NACHAValidator
    generation: NACHAGenerationService
    envelope: SecureEnvelope | None = None
    holidays: HolidayService | None = None


def build_engine(
    settings: AppSettings | None = None,
    *,
    holiday_provider: IHolidayProvider | None = None,
    file_store: IFileStore | None = None,
) -> Engine:
    if settings is None:
        settings = AppSettings()

    calendar = BusinessDayCalendar(between_convention=settings.business_day.between_convention)
    policy = EffectiveDatePolicy(calendar)

    secret = settings.encryption.secret_key.get_secret_value()
    if not secret and settings.encryption.encrypt_files and settings.environment == "prod":
        raise ConfigurationError("CLEARHOUSE_ENCRYPTION_SECRET_KEY is required when encrypting files in prod")
    envelope = SecureEnvelope(secret) if secret else None

    encoder = NACHAEncoder(
        settings.ach,
        policy=policy,
        envelope=envelope if settings.encryption.encrypt_files else None,
        path_prefix=settings.s3.prefix,
    )

    holidays = None
    if holiday_provider is not None:
        holidays = HolidayService(
            holiday_provider,
            calendar,
            refresh_hours=settings.business_day.holiday_refresh_hours,
            fallback_years=settings.business_day.default_holiday_years,
        )

    return Engine(
        calendar=calendar,
        policy=policy,
        encoder=encoder,
        validator=NACHAValidator(envelope),
        generation=NACHAGenerationService(encoder, policy, holidays=holidays, file_store=file_store),
        envelope=envelope,
        holidays=holidays,
    )
