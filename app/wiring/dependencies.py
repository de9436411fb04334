from collections.abc import Callable
from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.application.ports.crm import CrmPort
from app.application.ports.reference_data import ReferenceDataPort
from app.application.ports.wizard_store import WizardStorePort
from app.application.use_cases.booking_wizard import BookingWizard
from app.application.use_cases.submit_booking import SubmitBookingUseCase
from app.application.utils.date_parser import today_iso
from app.infrastructure.crm.bitrix_client import BitrixClient
from app.infrastructure.crm.bitrix_crm import BitrixCrm
from app.infrastructure.crm.demo_crm import DemoCrm
from app.infrastructure.reference.catalog_file import load_reference_data
from app.infrastructure.reference.reference_data_store import ReferenceDataStore
from app.infrastructure.store.memory_store import MemoryWizardStore


@lru_cache
def get_reference_data() -> ReferenceDataPort:
    if settings.SALON_CATALOG_PATH:
        return ReferenceDataStore(load_reference_data(settings.SALON_CATALOG_PATH))
    return ReferenceDataStore()


@lru_cache
def get_crm() -> CrmPort:
    logger = logging.getLogger(__name__)
    if settings.demo_mode:
        logger.info("Using DemoCrm (BITRIX_WEBHOOK_URL not set)")
        return DemoCrm(delay_seconds=settings.DEMO_SUBMIT_DELAY_SECONDS)

    logger.info("Using BitrixCrm")
    client = BitrixClient(
        webhook_url=settings.BITRIX_WEBHOOK_URL.strip(),
        timeout=settings.BITRIX_TIMEOUT_SECONDS,
    )
    return BitrixCrm(client=client)


@lru_cache
def get_wizard_store() -> WizardStorePort:
    return MemoryWizardStore(session_limit=settings.WIZARD_SESSION_LIMIT)


def _salon_timezone() -> ZoneInfo | None:
    try:
        return ZoneInfo(settings.SALON_TIMEZONE)
    except Exception:
        logging.getLogger(__name__).warning(
            "Unknown SALON_TIMEZONE, falling back to local date",
            extra={"reason": settings.SALON_TIMEZONE},
        )
        return None


def get_submit_booking_use_case() -> SubmitBookingUseCase:
    return SubmitBookingUseCase(reference=get_reference_data(), crm=get_crm())


def new_booking_wizard() -> BookingWizard:
    return BookingWizard(
        reference=get_reference_data(),
        submitter=get_submit_booking_use_case(),
        today=today_iso(_salon_timezone()),
    )


def get_wizard_factory() -> Callable[[], BookingWizard]:
    return new_booking_wizard
