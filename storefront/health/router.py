from fastapi import APIRouter, Request
from storefront import config
from storefront.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/config")
def health_config(request: Request):
    """Indique seulement si les intégrations sont configurées (booléens, jamais les valeurs)."""
    shop_id, secret_key = config.gateway_credentials()
    bot_token, chat_id = config.telegram_credentials()
    return {
        "gateway_configured": bool(shop_id and secret_key),
        "notifications_configured": bool(bot_token and chat_id),
        "rate_limit": rate_limit_health_info(request),
    }
