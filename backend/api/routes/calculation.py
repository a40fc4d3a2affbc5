"""Underfloor heating calculation endpoints."""

from fastapi import APIRouter

from backend.api.models.schemas import (
    CalculationData,
    CalculationRequest,
    CalculationResponse,
    ErrorResponse,
    ValidationErrorResponse,
)
from backend.services.underfloor_service import UnderfloorService

router = APIRouter()
service = UnderfloorService()


@router.post(
    "/calculate",
    response_model=CalculationResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    responses={
        400: {"model": ValidationErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def calculate_underfloor(params: CalculationRequest):
    """Calculate pipe step, lengths, circuits, advisory and materials budget.

    Floor types: PETREO | MADERA_MACIZA | MADERA_FLOTANTE | MOQUETA
    """
    result, budget = service.calculate(params.to_input())
    return CalculationResponse(data=CalculationData.from_result(result, budget))
