"""Settings-driven display formatting endpoint."""

from fastapi import APIRouter

from workforce_billing.api.dependencies import AppSettings
from workforce_billing.api.schemas import FormatRequest, FormatResponse
from workforce_billing.config import Settings
from workforce_billing.formatting import (
    CurrencySettings,
    DateTimeSettings,
    WorkspaceSettings,
    format_date,
    format_datetime,
    format_money,
    format_time,
    merge_settings,
)

router = APIRouter(tags=["formatting"])


def _workspace_defaults(app_settings: Settings) -> WorkspaceSettings:
    return WorkspaceSettings(
        currency=CurrencySettings.for_code(app_settings.default_currency),
        date_time=DateTimeSettings(timezone=app_settings.default_timezone),
    )


@router.post("/format", response_model=FormatResponse)
async def format_values(payload: FormatRequest, app_settings: AppSettings) -> FormatResponse:
    """Render an amount and a moment the way the workspace displays them.

    Stored workspace settings override the server defaults; unsupported
    values fall back to the defaults.
    """
    workspace = merge_settings(_workspace_defaults(app_settings), payload.settings)

    return FormatResponse(
        money=format_money(payload.amount, workspace),
        date_display=format_date(payload.value, workspace),
        time_display=format_time(payload.value, workspace),
        datetime_display=format_datetime(payload.value, workspace),
    )
