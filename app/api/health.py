from fastapi import APIRouter
from typing import Dict, Any

from ..config import settings
from ..core.swap.constants import SWAP_SOURCE
from ..core.swap.tokens import TOKEN_REGISTRY

router = APIRouter()


@router.get("/healthz")
async def health_check() -> Dict[str, Any]:
    """Liveness check; never calls LI.FI"""

    return {
        "status": "ok",
        "source": SWAP_SOURCE,
        "upstream": settings.lifi_base_url,
        "upstreamApiKey": settings.has_lifi_key,
        "defaultFromToken": settings.default_from_token,
        "supportedTokens": {
            alias: token.to_dict() for alias, token in TOKEN_REGISTRY.items()
        },
    }
