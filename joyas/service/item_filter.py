import math
import re
from typing import Optional, Literal, get_args
from pydantic import BaseModel, Field

from joyas.exceptions import ValidationError

SortField = Literal["id", "nombre", "precio", "stock", "categoria", "metal"]
SortDirection = Literal["ASC", "DESC"]

SORTABLE_FIELDS = get_args(SortField)
SORT_DIRECTIONS = get_args(SortDirection)

DEFAULT_ORDER_BY = "id_ASC"

# plain decimal literals only: no inf/nan, no digit separators, no hex
PRICE_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


class InventoryFilters(BaseModel):
    precio_min: Optional[float] = Field(None, description="precio >= precio_min")
    precio_max: Optional[float] = Field(None, description="precio <= precio_max")
    categoria: Optional[str] = Field(None, description="exact category match")
    metal: Optional[str] = Field(None, description="exact metal match")


class ListRequest(BaseModel):
    filters: InventoryFilters = Field(default_factory=InventoryFilters)
    limit: Optional[int] = Field(None, description="page size, None = no limit")
    page: int = Field(1, description="1-based page number")
    order_field: SortField = "id"
    order_direction: SortDirection = "ASC"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit if self.limit else 0


def _get(params, name):
    # blank values count as absent
    value = params.get(name)
    if value is None or value == "":
        return None
    return value


def _parse_price(params, name):
    value = _get(params, name)
    if value is None:
        return None
    text = str(value).strip()
    # 1e999 matches the pattern but overflows to inf
    if not PRICE_PATTERN.fullmatch(text) or not math.isfinite(float(text)):
        raise ValidationError(f"El valor de {name} debe ser un número válido", field=name)
    return float(text)


def _parse_positive_int(params, name, default=None):
    value = _get(params, name)
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = 0
    if number < 1:
        raise ValidationError(f"El valor de {name} debe ser un entero positivo", field=name)
    return number


def parse_order_by(order_by):
    """
    Split `<field>_<direction>` on the first underscore.
    Only whitelisted columns and ASC/DESC are accepted; a missing direction means ASC.
    """
    field, _, direction = order_by.partition("_")
    direction = (direction or "ASC").upper()
    if field not in SORTABLE_FIELDS or direction not in SORT_DIRECTIONS:
        raise ValidationError(
            f"El valor de order_by no es válido: {order_by}. "
            f"Campos permitidos: {', '.join(SORTABLE_FIELDS)}; direcciones: ASC, DESC",
            field="order_by",
        )
    return field, direction


def parse_filters(params) -> InventoryFilters:
    return InventoryFilters(
        precio_min=_parse_price(params, "precio_min"),
        precio_max=_parse_price(params, "precio_max"),
        categoria=_get(params, "categoria"),
        metal=_get(params, "metal"),
    )


def parse_list_request(params) -> ListRequest:
    filters = parse_filters(params)
    limit = _parse_positive_int(params, "limits")
    page = _parse_positive_int(params, "page", default=1)
    order_field, order_direction = parse_order_by(_get(params, "order_by") or DEFAULT_ORDER_BY)
    return ListRequest(
        filters=filters,
        limit=limit,
        page=page,
        order_field=order_field,
        order_direction=order_direction,
    )
