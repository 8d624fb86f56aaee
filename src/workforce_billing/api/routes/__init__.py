"""API routes."""

from workforce_billing.api.routes.formatting import router as formatting_router
from workforce_billing.api.routes.health import router as health_router
from workforce_billing.api.routes.invoices import router as invoices_router
from workforce_billing.api.routes.projects import router as projects_router

__all__ = ["formatting_router", "health_router", "invoices_router", "projects_router"]
