"""Diagnostic route — echoes the identity recovered from the bearer token."""

from fastapi import APIRouter, Depends

from subscore.schemas.auth import AuthCheckResponse, Identity, IdentityEcho
from subscore.services.auth_service import get_current_identity
from subscore.utils import now_utc

router = APIRouter(prefix="/api", tags=["diagnostics"])


@router.get("/test", response_model=AuthCheckResponse)
async def auth_check(identity: Identity = Depends(get_current_identity)):
    return AuthCheckResponse(
        message="Protected API access succeeded",
        timestamp=now_utc(),
        user=IdentityEcho(email=identity.email, name=identity.name, image=identity.picture),
    )
