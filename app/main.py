import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1.booking import router as booking_router
from app.core.config import settings
from app.wiring.dependencies import get_crm, get_reference_data

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("wizard_id", "step", "service", "staff", "status", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # fail fast on a broken catalog file
    get_reference_data()
    yield
    await get_crm().aclose()
    get_crm.cache_clear()


app = FastAPI(title="Salon Booking Wizard", version="1.0.0", lifespan=lifespan)

app.include_router(booking_router, prefix="/api/v1", tags=["booking"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
