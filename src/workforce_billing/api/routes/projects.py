"""Project budget endpoints."""

from fastapi import APIRouter

from workforce_billing.api.schemas import BudgetEstimateRequest, BudgetEstimateResponse
from workforce_billing.calculators.budget import estimate_budget
from workforce_billing.calculators.types import DateRange, PaymentSchedule, PaymentType

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("/estimate", response_model=BudgetEstimateResponse)
async def estimate_project_budget(payload: BudgetEstimateRequest) -> BudgetEstimateResponse:
    """Estimate a project budget from its payment schedule.

    Incomplete schedules estimate to zero with the missing inputs listed,
    so the form can keep responding while the user types.
    """
    schedule = PaymentSchedule(
        payment_type=PaymentType.parse(payload.payment_type),
        rate=payload.rate,
        working_days_per_week=payload.working_days_per_week,
        overtime_rate=payload.overtime_rate,
        overtime_hours=payload.overtime_hours,
    )
    estimate = estimate_budget(schedule, DateRange(payload.start_date, payload.end_date))

    return BudgetEstimateResponse(
        payment_type=estimate.payment_type.value,
        estimated_total=estimate.estimated_total,
        base_total=estimate.base_total,
        overtime_total=estimate.overtime_total,
        working_days=estimate.working_days,
        total_days=estimate.total_days,
        missing=estimate.missing,
        is_submittable=estimate.is_submittable,
    )
