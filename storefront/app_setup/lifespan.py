"""
Lifespan FastAPI de la boutique.

Démarrage:
- trace l'état des intégrations (YooKassa, Telegram) sans jamais logger les valeurs
- initialise FastAPILimiter sur Redis (ou fakeredis en test)
Arrêt:
- ferme la connexion Redis du limiteur si elle a été ouverte

Variables d'environnement:
- DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: pas de limiteur Redis (tests)
- USE_FAKE_REDIS_FOR_TESTS=1: fakeredis au lieu de RATE_LIMIT_REDIS_URL
- LOCAL_RATE_LIMIT_FALLBACK=1: limiteur en mémoire si Redis est injoignable
"""
import os
import logging
from contextlib import asynccontextmanager

import redis.asyncio as redis
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter

from storefront import config

try:
    from fakeredis.aioredis import FakeRedis  # tests only
except ImportError:
    FakeRedis = None

logger = logging.getLogger("uvicorn.error")

def _log_integrations() -> None:
    shop_id, secret_key = config.gateway_credentials()
    bot_token, chat_id = config.telegram_credentials()
    logger.info(
        "Storefront integrations: yookassa=%s telegram=%s",
        "configured" if shop_id and secret_key else "MISSING",
        "configured" if bot_token and chat_id else "MISSING",
    )

def _redis_connection():
    if os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1":
        if not FakeRedis:
            raise RuntimeError("USE_FAKE_REDIS_FOR_TESTS=1 but fakeredis is not installed")
        return FakeRedis(decode_responses=True)
    redis_url = os.getenv("RATE_LIMIT_REDIS_URL", "redis://127.0.0.1:6379/0")
    return redis.from_url(redis_url, encoding="utf-8", decode_responses=True)

async def _init_rate_limiter(app: FastAPI) -> bool:
    """Retourne True si FastAPILimiter a été initialisé (connexion à fermer à l'arrêt)."""
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
        return False
    try:
        await FastAPILimiter.init(_redis_connection())
    except Exception as e:
        # Sans fallback local, les endpoints restent servis sans limite
        fallback = os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1"
        app.state.rate_limit_enabled = fallback
        logger.warning("Rate limiting %s after Redis init error: %s", "local fallback" if fallback else "disabled", e)
        return False
    app.state.rate_limit_enabled = True
    logger.info("Rate limiting enabled (redis)")
    return True

@asynccontextmanager
async def lifespan(app: FastAPI):
    _log_integrations()
    limiter_ready = await _init_rate_limiter(app)
    yield
    if limiter_ready:
        await FastAPILimiter.close()
