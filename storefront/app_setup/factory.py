"""
Factory d'application utilisée par les entrypoints (storefront.asgi, python -m storefront).
"""
from fastapi import FastAPI
from storefront.webhooks.handlers import WebhookHandlerRegistry
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware, register_no_cache_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers

def create_app() -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - middlewares de base, sécurité, no-cache
      - gestionnaires d'exceptions
      - tous les routers (paiement, notifications, webhook, health)
      - le registre des handlers webhook (app.state.webhook_handlers)
    """
    app = FastAPI(title="FreshBox Storefront API", lifespan=lifespan)
    app.state.webhook_handlers = WebhookHandlerRegistry()
    register_basic_middlewares(app)
    register_security_middleware(app)
    register_no_cache_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
