"""
Registre central des routers.
- API: payments (/api/create-payment), notifications (/api/send-lead), webhooks (/api/payment-webhook)
- Health: /health
"""
from fastapi import FastAPI
from storefront.payments import views as payments_views
from storefront.notifications import views as notifications_views
from storefront.webhooks import views as webhooks_views
from storefront.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.router)
    app.include_router(notifications_views.router)
    app.include_router(webhooks_views.router)
    app.include_router(health_router)
