"""Router principal do WhatsApp — agrega todos os endpoints do canal."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.whatsapp.qr_code import router as qr_code_router
from api.routes.whatsapp.send import router as send_router

router = APIRouter()

router.include_router(send_router)
router.include_router(qr_code_router)
