"""OTP API router — mobile-number verification endpoints.

Endpoints
---------
POST /api/otp/request                  → issue and send a code
POST /api/otp/verify                   → check a submitted code
GET  /api/development-get-latest-otp   → last issued code (development mode only)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from vidshare.otp.service import OTPService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/otp", tags=["otp"])

dev_router = APIRouter(prefix="/api", tags=["development"])

# Ten-digit mobile numbers, no separators
MOBILE_PATTERN = r"^[0-9]{10}$"


def get_otp_service(request: Request) -> OTPService:
    return request.app.state.otp_service


# ── Response / request models ────────────────────────────

class OTPRequest(BaseModel):
    mobile: str = Field(..., pattern=MOBILE_PATTERN, description="Mobile number to verify")


class OTPRequestResponse(BaseModel):
    success: bool
    message: str


class OTPVerifyRequest(BaseModel):
    mobile: str = Field(..., pattern=MOBILE_PATTERN)
    otp: str


class OTPVerifyResponse(BaseModel):
    verified: bool


class LatestOTPResponse(BaseModel):
    otp: str | None


# ── Endpoints ────────────────────────────────────────────

@router.post("/request", response_model=OTPRequestResponse)
async def request_otp(body: OTPRequest, service: OTPService = Depends(get_otp_service)):
    """Issue a code for the given mobile number.

    Always succeeds once the code is stored; delivery happens in the
    background and its failures are only logged.
    """
    await service.request_code(body.mobile)
    return OTPRequestResponse(success=True, message="OTP sent")


@router.post("/verify", response_model=OTPVerifyResponse)
async def verify_otp(body: OTPVerifyRequest, service: OTPService = Depends(get_otp_service)):
    """Validate a code for the given mobile number."""
    if not await service.verify(body.mobile, body.otp):
        raise HTTPException(status_code=400, detail="Invalid or expired OTP")
    return OTPVerifyResponse(verified=True)


@dev_router.get("/development-get-latest-otp", response_model=LatestOTPResponse)
async def latest_otp(service: OTPService = Depends(get_otp_service)):
    """Return the most recently issued code (any destination)."""
    return LatestOTPResponse(otp=service.peek_last_issued_code())
