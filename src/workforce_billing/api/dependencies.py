"""FastAPI dependencies for dependency injection."""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import Depends

from workforce_billing.config import Settings, get_settings
from workforce_billing.services.invoice_service import InvoiceService


def get_app_settings() -> Settings:
    """Get application settings dependency."""
    return get_settings()


def get_invoice_service(
    app_settings: Annotated[Settings, Depends(get_app_settings)],
) -> InvoiceService:
    """Get invoice service dependency."""
    return InvoiceService(app_settings)


def get_now() -> datetime:
    """Current time, the reference point for future-period checks."""
    return datetime.now(timezone.utc)


# Type aliases for cleaner dependency injection
AppSettings = Annotated[Settings, Depends(get_app_settings)]
InvoiceServiceDep = Annotated[InvoiceService, Depends(get_invoice_service)]
Now = Annotated[datetime, Depends(get_now)]
