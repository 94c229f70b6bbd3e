import logging
import traceback
from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from joyas.db import InventoryStore, get_store
from joyas.service.item_filter import parse_filters, parse_list_request
from joyas.service.item_service import list_items, list_filter_rows

logger = logging.getLogger(__name__)

router = APIRouter()


def error_response(request: Request, exc: Exception, route: str, message: str, status_code: int):
    logger.exception("Error en la ruta %s: %s", route, exc)
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "details": {
                "message": str(exc),
                "stack": traceback.format_exc(),
                "route": route,
                "timestamp": timestamp,
                "query_parameters": dict(request.query_params),
            },
        },
    )


@router.get("/joyas")
def get_joyas(
    request: Request,
    limits: Optional[str] = Query(None, description="Page size; omitted = all rows"),
    page: Optional[str] = Query(None, description="1-based page number"),
    order_by: Optional[str] = Query(None, description="<field>_<ASC|DESC>, default id_ASC"),
    precio_min: Optional[str] = Query(None),
    precio_max: Optional[str] = Query(None),
    categoria: Optional[str] = Query(None),
    metal: Optional[str] = Query(None),
    store: InventoryStore = Depends(get_store),
):
    try:
        body = parse_list_request({
            "limits": limits,
            "page": page,
            "order_by": order_by,
            "precio_min": precio_min,
            "precio_max": precio_max,
            "categoria": categoria,
            "metal": metal,
        })
        return list_items(store, body)
    except Exception as e:
        return error_response(request, e, "/joyas", "Hubo un problema al recuperar las joyas.", 500)


@router.get("/joyas/filtros")
def get_joyas_filtros(
    request: Request,
    precio_min: Optional[str] = Query(None),
    precio_max: Optional[str] = Query(None),
    categoria: Optional[str] = Query(None),
    metal: Optional[str] = Query(None),
    store: InventoryStore = Depends(get_store),
):
    try:
        filters = parse_filters({
            "precio_min": precio_min,
            "precio_max": precio_max,
            "categoria": categoria,
            "metal": metal,
        })
        return list_filter_rows(store, filters)
    except Exception as e:
        return error_response(request, e, "/joyas/filtros", "Parámetros incorrectos.", 400)
