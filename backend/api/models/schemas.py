"""Pydantic schemas for API request/response models.

Wire field names follow the public API (camelCase, Spanish); Python
attributes are snake_case aliases of them.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from underfloor.advisory import AdvisoryLevel
from underfloor.budget import Budget
from underfloor.calculation import CalculationInput, CalculationOutput
from underfloor.rules import FloorType


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CalculationRequest(ApiModel):
    """Underfloor heating calculation input."""
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    area: float = Field(ge=1, le=1000, description="Heated area (m2)")
    thermal_load: float = Field(
        alias="cargaTermicaRequerida", ge=10, le=150,
        description="Required thermal load (W/m2)",
    )
    floor_type: FloorType = Field(alias="tipoDeSuelo", description="Floor finish")
    collector_distance: float = Field(
        alias="distanciaAlColector", ge=0, le=50,
        description="Manifold to room entrance distance (m)",
    )
    feed_distance: float | None = Field(
        default=None, alias="distanciaAlimentacion",
        description="Boiler to manifold distance (m)",
    )

    def to_input(self) -> CalculationInput:
        return CalculationInput(
            area=self.area,
            thermal_load=self.thermal_load,
            floor_type=self.floor_type,
            collector_distance=self.collector_distance,
            feed_distance=self.feed_distance,
        )


class AdvisoryOut(ApiModel):
    level: AdvisoryLevel
    message: str


class BudgetItemOut(ApiModel):
    product_id: str = Field(alias="productoId")
    name: str = Field(alias="nombre")
    quantity: int = Field(alias="cantidad")
    unit: str = Field(alias="unidad")
    unit_price: float = Field(alias="precioUnitario")
    subtotal: float


class BudgetOut(ApiModel):
    items: list[BudgetItemOut]
    materials_total: float = Field(alias="totalMateriales")
    estimated_waste: float = Field(alias="desperdicioEstimado", description="Pipe waste (m)")
    total: float = Field(alias="totalFinal")

    @classmethod
    def from_budget(cls, budget: Budget) -> "BudgetOut":
        return cls(
            items=[
                BudgetItemOut(
                    product_id=i.product_id,
                    name=i.name,
                    quantity=i.quantity,
                    unit=i.unit,
                    unit_price=i.unit_price,
                    subtotal=i.subtotal,
                )
                for i in budget.items
            ],
            materials_total=budget.materials_total,
            estimated_waste=budget.estimated_waste,
            total=budget.total,
        )


class CalculationData(ApiModel):
    """Calculation result plus its materials budget."""
    pipe_step_cm: int = Field(alias="pasoSeleccionado", description="Pipe step (cm)")
    pipe_density: float = Field(alias="densidadTuberia", description="Pipe density (m/m2)")
    serpentine_length: float = Field(alias="longitudSerpentina")
    feed_run_length: float = Field(alias="longitudAcometida")
    total_length: float = Field(alias="longitudTotal")
    circuit_count: int = Field(alias="numeroCircuitos")
    max_floor_power: float = Field(alias="potenciaMaximaSuelo", description="W/m2")
    advisory: AdvisoryOut | None = Field(default=None, alias="advisoryMessage")
    design_note: str = Field(alias="notaDiseno")
    feed_distance: float | None = Field(default=None, alias="distanciaAlimentacion")
    budget: BudgetOut = Field(alias="presupuesto")

    @classmethod
    def from_result(cls, result: CalculationOutput, budget: Budget) -> "CalculationData":
        advisory = None
        if result.advisory is not None:
            advisory = AdvisoryOut(level=result.advisory.level, message=result.advisory.message)
        return cls(
            pipe_step_cm=result.pipe_step_cm,
            pipe_density=result.pipe_density,
            serpentine_length=result.serpentine_length,
            feed_run_length=result.feed_run_length,
            total_length=result.total_length,
            circuit_count=result.circuit_count,
            max_floor_power=result.max_floor_power,
            advisory=advisory,
            design_note=result.design_note,
            feed_distance=result.feed_distance,
            budget=BudgetOut.from_budget(budget),
        )


class CalculationResponse(ApiModel):
    success: bool = True
    data: CalculationData


class FieldError(ApiModel):
    field: str
    message: str


class ValidationErrorResponse(ApiModel):
    success: bool = False
    error: str = "Validation Error"
    details: list[FieldError]


class ErrorResponse(ApiModel):
    success: bool = False
    error: str
    message: str


class HealthResponse(ApiModel):
    status: str = "OK"
    service: str
    version: str
    timestamp: datetime
