"""
Adaptateur YooKassa: centralise les appels HTTP et la configuration de la passerelle.
"""
import logging
import time
from typing import Any, Dict, Optional, Tuple

import httpx

from storefront import config
from storefront.errors import ConfigurationError, NetworkError, UpstreamError

logger = logging.getLogger(__name__)

PUBLIC_PAYMENT_ERROR = "Payment error"
MAX_DESCRIPTION_LENGTH = 128

# module storefront.payments.yookassa_client
def require_credentials() -> Tuple[str, str]:
    """
    Retourne (shop_id, secret_key) ou lève ConfigurationError.
    - Le log indique seulement SET/EMPTY pour chaque valeur, jamais la valeur.
    - Le message public reste générique: l'appelant ne sait pas laquelle manque.
    """
    shop_id, secret_key = config.gateway_credentials()
    if not shop_id or not secret_key:
        logger.error(
            "payments.yookassa missing credentials shop_id=%s secret_key=%s",
            "SET" if shop_id else "EMPTY",
            "SET" if secret_key else "EMPTY",
        )
        raise ConfigurationError("YooKassa credentials missing", public_message=PUBLIC_PAYMENT_ERROR)
    return shop_id, secret_key

def make_idempotence_key(order_id: Any, now_ms: Optional[int] = None) -> str:
    """
    Clé d'idempotence "<orderId>-<epoch ms>".
    Best-effort: deux appels à des millisecondes différentes produisent deux clés.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{order_id}-{now_ms}"

def build_payment_payload(*, amount: float, order_id: Any, description: str, return_url: str) -> Dict[str, Any]:
    """
    Construit le corps de création de paiement (capture immédiate, confirmation par redirection).
    """
    full_description = f"Заказ №{order_id}: {description}"
    return {
        "amount": {"value": f"{amount:.2f}", "currency": config.PAYMENT_CURRENCY},
        "capture": True,
        "confirmation": {"type": "redirect", "return_url": return_url},
        "description": full_description[:MAX_DESCRIPTION_LENGTH],
    }

def _http_client() -> httpx.Client:
    return httpx.Client(timeout=config.GATEWAY_TIMEOUT_SECONDS)

def create_payment(payload: Dict[str, Any], idempotence_key: str) -> Dict[str, Any]:
    """
    Crée un paiement YooKassa.
    - Auth HTTP Basic shop_id:secret_key, en-tête Idempotence-Key.
    - Pas de retry interne: la resoumission est à la charge de l'appelant.
    Retour: le JSON du paiement (dict).
    Erreurs: NetworkError si la requête n'aboutit pas, UpstreamError si statut non 2xx
    ou corps illisible. Le détail part dans les logs, jamais vers l'appelant.
    """
    shop_id, secret_key = require_credentials()
    try:
        with _http_client() as client:
            resp = client.post(
                config.YOOKASSA_API_URL,
                json=payload,
                auth=(shop_id, secret_key),
                headers={"Idempotence-Key": idempotence_key},
            )
    except httpx.HTTPError as e:
        logger.error("payments.yookassa request failed key=%s error=%s", idempotence_key, e)
        raise NetworkError(f"YooKassa request failed: {e}", public_message=PUBLIC_PAYMENT_ERROR)

    if not resp.is_success:
        logger.error(
            "payments.yookassa api error status=%s reason=%s body=%s",
            resp.status_code, resp.reason_phrase, resp.text,
        )
        raise UpstreamError(f"YooKassa returned {resp.status_code}", public_message=PUBLIC_PAYMENT_ERROR, status=resp.status_code)

    try:
        data = resp.json()
    except ValueError:
        logger.error("payments.yookassa unparsable body status=%s body=%s", resp.status_code, resp.text)
        raise UpstreamError("YooKassa returned a non-JSON body", public_message=PUBLIC_PAYMENT_ERROR, status=resp.status_code)
    if not isinstance(data, dict):
        raise UpstreamError("YooKassa returned an unexpected body", public_message=PUBLIC_PAYMENT_ERROR, status=resp.status_code)
    return data

def extract_confirmation_url(payment: Dict[str, Any]) -> str:
    """Lit payment.confirmation.confirmation_url ou lève UpstreamError."""
    confirmation = payment.get("confirmation") or {}
    url = confirmation.get("confirmation_url") if isinstance(confirmation, dict) else None
    if not url or not isinstance(url, str):
        logger.error("payments.yookassa missing confirmation_url payment=%s", payment)
        raise UpstreamError("confirmation_url missing", public_message=PUBLIC_PAYMENT_ERROR)
    return url
