from fastapi import APIRouter

from ..config import get_settings

router = APIRouter()


@router.get("")
def health():
    """Return API status and whether DNS checks are enabled."""
    return {"status": "ok", "dns_checks": get_settings().enable_dns_checks}
