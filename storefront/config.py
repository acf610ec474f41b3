# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

"""
Configuration centrale de la boutique.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose les constantes boutique (seuil de livraison offerte, frais, ville)
- Normalise les secrets (YooKassa, Telegram) et les URLs publiques
- Les identifiants sont relus à l'appel (gateway_credentials / telegram_credentials)
  pour que les tests puissent les modifier via monkeypatch.setenv
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _env_int(name: str, default: int) -> int:
    raw = _clean_env(os.getenv(name) or "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default

def _env_float(name: str, default: float) -> float:
    raw = _clean_env(os.getenv(name) or "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default

# Panier: seuil de livraison offerte et frais fixes (en roubles)
FREE_SHIPPING_THRESHOLD = _env_int("FREE_SHIPPING_THRESHOLD", 2000)
SHIPPING_COST = _env_int("SHIPPING_COST", 300)

# Checkout: ville affichée dans la notification de fin de commande, délais UI
DEFAULT_CITY = os.getenv("DEFAULT_CITY", "Москва")
SUCCESS_RESET_DELAY_SECONDS = _env_float("SUCCESS_RESET_DELAY_SECONDS", 3.0)
DELIVERY_PICKER_COLLAPSE_SECONDS = _env_float("DELIVERY_PICKER_COLLAPSE_SECONDS", 0.5)

# Routes de navigation consommées par le checkout après un paiement
SUCCESS_ROUTE = os.getenv("SUCCESS_ROUTE", "/success")
FAIL_ROUTE = os.getenv("FAIL_ROUTE", "/fail")

# YooKassa: API et devise
YOOKASSA_API_URL = _clean_env(os.getenv("YOOKASSA_API_URL") or "https://api.yookassa.ru/v3/payments")
PAYMENT_CURRENCY = os.getenv("PAYMENT_CURRENCY", "RUB")
GATEWAY_TIMEOUT_SECONDS = _env_float("GATEWAY_TIMEOUT_SECONDS", 10.0)

# Telegram: API du bot de notification
TELEGRAM_API_URL = _clean_env(os.getenv("TELEGRAM_API_URL") or "https://api.telegram.org")

# URL publique utilisée comme origine de retour quand l'en-tête Origin est absent
PUBLIC_BASE_URL = _clean_env(os.getenv("PUBLIC_BASE_URL") or "https://your-domain.vercel.app").rstrip("/")

# CORS / hosts
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")

def gateway_credentials() -> tuple[str, str]:
    """Retourne (shop_id, secret_key) YooKassa, chaînes vides si absentes."""
    return (
        _clean_env(os.getenv("YOOKASSA_SHOP_ID") or ""),
        _clean_env(os.getenv("YOOKASSA_SECRET_KEY") or ""),
    )

def telegram_credentials() -> tuple[str, str]:
    """Retourne (bot_token, chat_id) Telegram, chaînes vides si absentes."""
    return (
        _clean_env(os.getenv("TG_BOT_TOKEN") or ""),
        _clean_env(os.getenv("TG_CHAT_ID") or ""),
    )
