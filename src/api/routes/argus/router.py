"""Router do Argus: agrega os endpoints do webhook."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.argus.webhook import router as webhook_router

ARGUS_WEBHOOK_PREFIX = "/api/argus-webhook"

router = APIRouter()

# POST na raiz e com segmento de telefone no path
router.include_router(webhook_router, prefix=ARGUS_WEBHOOK_PREFIX)
