import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from storefront.errors import StorefrontError
from storefront.utils.rate_limit import optional_rate_limit
from . import service
from .telegram_client import PUBLIC_SEND_ERROR

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Notifications API"])

# module storefront.notifications.views
@router.api_route(
    "/send-lead",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    dependencies=[Depends(optional_rate_limit(times=10, seconds=60))],
)
async def send_lead(request: Request):
    """
    Transmet une commande ou un prospect B2B au canal de notification.
    - Réponses: 200 {"status": "ok"}; 400/405/500 {"message": "..."}
    """
    if request.method != "POST":
        return JSONResponse({"message": "Method not allowed"}, status_code=405)
    try:
        body = await request.json()
    except ValueError:
        body = None

    try:
        await run_in_threadpool(service.dispatch_lead, body)
    except StorefrontError as e:
        if e.status_code >= 500:
            logger.error("notifications.lead failed detail=%s", e.detail)
        return JSONResponse({"message": e.public_message}, status_code=e.status_code)
    except Exception:
        logger.exception("Erreur send_lead")
        return JSONResponse({"message": PUBLIC_SEND_ERROR}, status_code=500)
    return JSONResponse({"status": "ok"})
