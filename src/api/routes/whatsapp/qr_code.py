"""Endpoint do código de pareamento (QR) da sessão."""

from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from utils.errors import PairingCodeNotFoundError

router = APIRouter()

QR_NOT_AVAILABLE_MESSAGE = "QR code not available. Please initialize the client first."


class QrCodeResponse(BaseModel):
    """Código de pareamento atual."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    qr_code: str = Field(alias="qrCode")


@router.get("/qr-code", response_model=QrCodeResponse)
async def get_qr_code(request: Request) -> JSONResponse:
    """Retorna o último código de pareamento recebido, ou 404."""
    try:
        pairing_code = request.app.state.runtime.context.require_pairing_code()
    except PairingCodeNotFoundError:
        return JSONResponse(
            content={"success": False, "error": QR_NOT_AVAILABLE_MESSAGE},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return JSONResponse(
        content=QrCodeResponse(qr_code=pairing_code).model_dump(by_alias=True),
        status_code=status.HTTP_200_OK,
    )
