"""API route modules."""

from src.api.routes.health import router as health_router
from src.api.routes.identities import router as identities_router
from src.api.routes.ledger import router as ledger_router
from src.api.routes.products import router as products_router
from src.api.routes.reports import router as reports_router
from src.api.routes.stats import router as stats_router

__all__ = [
    "health_router",
    "products_router",
    "reports_router",
    "stats_router",
    "ledger_router",
    "identities_router",
]
