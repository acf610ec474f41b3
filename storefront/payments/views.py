import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from storefront.errors import StorefrontError
from storefront.utils.rate_limit import optional_rate_limit
from . import service
from .yookassa_client import PUBLIC_PAYMENT_ERROR

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Payments API"])

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

# module storefront.payments.views
@router.api_route(
    "/create-payment",
    methods=ALL_METHODS,
    dependencies=[Depends(optional_rate_limit(times=10, seconds=60))],
)
async def create_payment(request: Request):
    """
    Crée un paiement YooKassa et renvoie l'URL de redirection.
    - Entrée JSON: { "amount": <number>, "orderId": <str|number>, "description": <str> }
    - Réponses: 200 {"confirmation_url": "..."}; 400/405/500 {"error": "..."}
    - Les erreurs passerelle/configuration sont normalisées en "Payment error".
    """
    if request.method != "POST":
        return JSONResponse({"error": "Method not allowed"}, status_code=405)

    try:
        body = await request.json()
    except ValueError:
        body = None

    try:
        confirmation_url = await run_in_threadpool(
            service.create_payment_session, body, request.headers.get("origin")
        )
    except StorefrontError:
        raise
    except Exception:
        logger.exception("Erreur create_payment")
        return JSONResponse({"error": PUBLIC_PAYMENT_ERROR}, status_code=500)
    return JSONResponse({"confirmation_url": confirmation_url})
