from __future__ import annotations

from fastapi import FastAPI

from .api.signals import get_controller, router
from .core.config import settings
from .core.logging import setup_logging

app = FastAPI(title="OTC Signal API")
app.include_router(router)


@app.on_event("startup")
async def _startup():
    setup_logging(settings.log_level)
    # load the persisted history before the first request
    await get_controller()


@app.get("/")
def root():
    return {"status": "OTC Signal API running"}


@app.get("/health")
def health():
    return {"ok": True}
