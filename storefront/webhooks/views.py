import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from .events import parse_envelope
from .handlers import WebhookHandlerRegistry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Payments Webhook"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

def _registry(request: Request) -> WebhookHandlerRegistry:
    registry = getattr(request.app.state, "webhook_handlers", None)
    if registry is None:
        registry = WebhookHandlerRegistry()
        request.app.state.webhook_handlers = registry
    return registry

# module storefront.webhooks.views
@router.api_route(
    "/payment-webhook",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def payment_webhook(request: Request):
    """
    Webhook YooKassa: acquitte toujours en 200 pour ne pas déclencher les renvois de la passerelle.
    - OPTIONS: preflight CORS (200, sans corps)
    - autre que POST: 405
    - enveloppe sans event/object: {"status": "ignored"}
    - événement traité ou inconnu: {"ok": true}
    - toute exception interne: loggée puis {"ok": true, "error": "Processing error"}
    Pas de déduplication par id d'événement à ce niveau.
    """
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    if request.method != "POST":
        return JSONResponse({"error": "Method not allowed"}, status_code=405, headers=CORS_HEADERS)

    try:
        body = await request.json()
        event = parse_envelope(body)
        if event is None:
            logger.info("payments.webhook invalid data: missing event or object")
            return JSONResponse({"status": "ignored"}, headers=CORS_HEADERS)

        logger.info(
            "payments.webhook event=%s payment_id=%s status=%s amount=%s description=%r time=%s",
            event.event_type, event.payment_id, event.status, event.amount, event.description, event.received_at,
        )
        _registry(request).dispatch(event)
        return JSONResponse({"ok": True}, headers=CORS_HEADERS)
    except Exception:
        logger.exception("payments.webhook processing error")
        return JSONResponse({"ok": True, "error": "Processing error"}, headers=CORS_HEADERS)
