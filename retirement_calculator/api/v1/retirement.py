"""POST /v1/retirement-plans/calculate - retirement savings projection endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from retirement_calculator.api.v1.schemas import RetirementPlanRequest, RetirementPlanResponse
from retirement_calculator.api.dependencies import get_request_id, get_retirement_service
from retirement_calculator.domain.exceptions import (
    HTTP_STATUS,
    CalculationFailedError,
    InvalidInputError,
    LifestyleNotFoundError,
)
from retirement_calculator.domain.models import RetirementRequest
from retirement_calculator.infrastructure.observability.logging import log_calculation
from retirement_calculator.infrastructure.observability.metrics import record_calculation
from retirement_calculator.services.retirement import RetirementService

router = APIRouter()


@router.post("/retirement-plans/calculate", response_model=RetirementPlanResponse)
def calculate_plan(
    request_body: RetirementPlanRequest,
    request: Request,
    service: RetirementService = Depends(get_retirement_service),
):
    """
    Project retirement savings for a lifestyle's cached monthly deposit.

    Errors:
        400 RC-400 invalid ages or negative rate
        404 RC-404 lifestyle has no cached deposit or rate
        500 RC-500 calculation could not complete
    """
    start_time = time.time()
    request_id = get_request_id(request)

    def finish(outcome: str, future_value: str | None = None) -> None:
        record_calculation(outcome)
        duration_ms = (time.time() - start_time) * 1000
        log_calculation(request_id, request_body.lifestyle_type, outcome, duration_ms, future_value)

    try:
        result = service.calculate_plan(
            RetirementRequest(
                current_age=request_body.current_age,
                retirement_age=request_body.retirement_age,
                interest_rate=request_body.interest_rate,
                lifestyle_type=request_body.lifestyle_type,
            )
        )

    except InvalidInputError as e:
        finish("invalid_input")
        logging.warning(f"Invalid input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=HTTP_STATUS[e.code], detail={"code": e.code, "message": e.message})

    except LifestyleNotFoundError as e:
        finish("not_found")
        logging.warning(f"Lifestyle not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=HTTP_STATUS[e.code], detail={"code": e.code, "message": e.message})

    except CalculationFailedError as e:
        finish("failed")
        logging.error(f"Calculation failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=HTTP_STATUS[e.code], detail={"code": e.code, "message": e.message})

    finish("success", str(result.future_value))
    return RetirementPlanResponse(
        current_age=result.current_age,
        retirement_age=result.retirement_age,
        interest_rate=result.interest_rate,
        lifestyle_type=result.lifestyle_type,
        monthly_deposit=result.monthly_deposit,
        future_value=result.future_value,
    )
