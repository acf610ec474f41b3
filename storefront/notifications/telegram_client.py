"""
Adaptateur Telegram Bot API (sendMessage).
"""
import logging
from typing import Any, Dict, Tuple

import httpx

from storefront import config
from storefront.errors import ConfigurationError, NetworkError, UpstreamError

logger = logging.getLogger(__name__)

PUBLIC_CONFIG_ERROR = "Server configuration error"
PUBLIC_SEND_ERROR = "Telegram send error"

# module storefront.notifications.telegram_client
def require_credentials() -> Tuple[str, str]:
    bot_token, chat_id = config.telegram_credentials()
    if not bot_token or not chat_id:
        logger.error("notifications.telegram missing credentials")
        raise ConfigurationError("Telegram credentials missing", public_message=PUBLIC_CONFIG_ERROR)
    return bot_token, chat_id

def _http_client() -> httpx.Client:
    return httpx.Client(timeout=config.GATEWAY_TIMEOUT_SECONDS)

def send_message(text: str) -> Dict[str, Any]:
    """
    Envoie un message HTML au chat configuré.
    Erreurs: ConfigurationError, NetworkError, UpstreamError (détail loggé uniquement).
    """
    bot_token, chat_id = require_credentials()
    url = f"{config.TELEGRAM_API_URL}/bot{bot_token}/sendMessage"
    try:
        with _http_client() as client:
            resp = client.post(url, json={"chat_id": chat_id, "text": text, "parse_mode": "HTML"})
    except httpx.HTTPError as e:
        # L'URL contient le token: ne logger que le type d'erreur
        logger.error("notifications.telegram request failed error=%s", type(e).__name__)
        raise NetworkError("Telegram request failed", public_message=PUBLIC_SEND_ERROR)

    if not resp.is_success:
        try:
            description = (resp.json() or {}).get("description")
        except ValueError:
            description = resp.text
        logger.error("notifications.telegram api error status=%s description=%s", resp.status_code, description)
        raise UpstreamError(f"Telegram returned {resp.status_code}", public_message=PUBLIC_SEND_ERROR, status=resp.status_code)
    try:
        return resp.json()
    except ValueError:
        return {}
