"""Health endpoint for the Order Signer Gateway (no auth required)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from apps.order_signer.config import SignerSettings
from apps.order_signer.dependencies import get_settings
from apps.order_signer.schemas import HealthResponse

router = APIRouter()


@router.get("/health", tags=["health"], response_model=HealthResponse)
async def health_check(settings: SignerSettings = Depends(get_settings)) -> HealthResponse:
    """
    Report the configured signing network.

    Always succeeds while the process is up.

    Examples:
        >>> import httpx
        >>> httpx.get("http://localhost:3000/health").json()
        {'ok': True, 'host': 'https://clob.polymarket.com', 'chainId': 137}
    """
    return HealthResponse(host=settings.clob_host, chain_id=settings.chain_id)
