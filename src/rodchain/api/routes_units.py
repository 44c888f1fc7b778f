"""FastAPI router exposing unit conversion helpers."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from rodchain.catalog import DEFAULT_CATALOG
from rodchain.core.dimensions import DimensionalError, IncompatibleDimensionError
from rodchain.core.quantity import Quantity
from rodchain.observability import log_event
from rodchain.units.factor import ConversionFactor, NumericOverflowError
from rodchain.units.graph import UnresolvedConversionError
from rodchain.units.parse import UnitParseError, parse_quantity, parse_unit_expr
from rodchain.units.resolve import resolve

router = APIRouter(prefix="/v1/units", tags=["units"])

_ERROR_CODES = (
    (UnitParseError, "unit_parse_error"),
    (IncompatibleDimensionError, "incompatible_dimension"),
    (UnresolvedConversionError, "unresolved_conversion"),
    (NumericOverflowError, "numeric_overflow"),
    (DimensionalError, "dimensional_error"),
)


def _unprocessable(exc: Exception) -> HTTPException:
    code = next((name for kind, name in _ERROR_CODES if isinstance(exc, kind)), "invalid_request")
    message = exc.message if isinstance(exc, UnitParseError) else str(exc)
    return HTTPException(status_code=422, detail={"code": code, "message": message})


class FactorModel(BaseModel):
    real: float
    numerator: Optional[int] = None
    denominator: Optional[int] = None
    exact: bool

    @classmethod
    def from_factor(cls, factor: ConversionFactor) -> "FactorModel":
        return cls(
            real=factor.real,
            numerator=factor.numerator,
            denominator=factor.denominator,
            exact=factor.is_exact,
        )


class QuantityModel(BaseModel):
    value: float
    unit: str
    dimension: str
    text: str

    @classmethod
    def from_quantity(cls, quantity: Quantity) -> "QuantityModel":
        return cls(
            value=float(quantity.value),
            unit=quantity.unit.symbol,
            dimension=str(quantity.dimension),
            text=str(quantity),
        )


class ConvertReq(BaseModel):
    value: float
    from_unit: str = Field(..., description="Unit expression of the input value")
    to_unit: str = Field(..., description="Unit expression to convert into")


class ConvertResp(BaseModel):
    quantity: QuantityModel
    factor: FactorModel


@router.post("/convert", response_model=ConvertResp)
def convert(req: ConvertReq) -> ConvertResp:
    try:
        source = parse_unit_expr(req.from_unit)
        target = parse_unit_expr(req.to_unit)
        factor = resolve(source, target)
        converted = Quantity(req.value, source).into(target)
    except (UnitParseError, DimensionalError) as exc:
        raise _unprocessable(exc) from exc

    log_event("units.convert", source=req.from_unit, target=req.to_unit)
    return ConvertResp(
        quantity=QuantityModel.from_quantity(converted),
        factor=FactorModel.from_factor(factor),
    )


class FactorReq(BaseModel):
    from_unit: str
    to_unit: str


@router.post("/factor", response_model=FactorModel)
def factor(req: FactorReq) -> FactorModel:
    try:
        result = resolve(parse_unit_expr(req.from_unit), parse_unit_expr(req.to_unit))
    except (UnitParseError, DimensionalError) as exc:
        raise _unprocessable(exc) from exc
    return FactorModel.from_factor(result)


class AddReq(BaseModel):
    lhs: str = Field(..., description="Quantity such as '2 m'")
    rhs: str = Field(..., description="Quantity such as '3 ft'")
    subtract: bool = False


@router.post("/add", response_model=QuantityModel)
def add(req: AddReq) -> QuantityModel:
    try:
        lhs = parse_quantity(req.lhs)
        rhs = parse_quantity(req.rhs)
        total = lhs - rhs if req.subtract else lhs + rhs
    except (UnitParseError, DimensionalError) as exc:
        raise _unprocessable(exc) from exc
    return QuantityModel.from_quantity(total)


class CatalogEntry(BaseModel):
    symbol: str
    name: Optional[str] = None
    system: str
    dimension: str


class CatalogResp(BaseModel):
    units: List[CatalogEntry]


@router.get("/catalog", response_model=CatalogResp)
def catalog() -> CatalogResp:
    entries = [
        CatalogEntry(
            symbol=symbol,
            name=unit.name,
            system=unit.system.name,
            dimension=str(unit.dimension),
        )
        for symbol, unit in DEFAULT_CATALOG.items()
    ]
    return CatalogResp(units=entries)


__all__ = ["router"]
