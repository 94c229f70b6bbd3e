from joyas.service.item_filter import InventoryFilters, ListRequest

TABLE = "inventario"


def build_where_clause(filters: InventoryFilters):
    conditions = []
    params = []

    if filters.precio_min is not None:
        conditions.append("precio >= %s")
        params.append(filters.precio_min)

    if filters.precio_max is not None:
        conditions.append("precio <= %s")
        params.append(filters.precio_max)

    if filters.categoria is not None:
        conditions.append("categoria = %s")
        params.append(filters.categoria)

    if filters.metal is not None:
        conditions.append("metal = %s")
        params.append(filters.metal)

    if not conditions:
        return "", []
    return "WHERE " + " AND ".join(conditions), params


def build_filter_query(filters: InventoryFilters):
    where_clause, params = build_where_clause(filters)
    query = f"SELECT * FROM {TABLE}"
    if where_clause:
        query += f" {where_clause}"
    return query, params


def build_list_query(request: ListRequest):
    query, params = build_filter_query(request.filters)

    # order_field / order_direction are whitelisted in item_filter
    query += f" ORDER BY {request.order_field} {request.order_direction}"

    if request.limit is not None:
        query += " LIMIT %s OFFSET %s"
        params.extend([request.limit, request.offset])

    return query, params


def summarize_items(rows):
    total_stock = sum(int(row["stock"] or 0) for row in rows)
    joyas = [
        {"id": row["id"], "nombre": row["nombre"], "href": f"/joyas/{row['id']}"}
        for row in rows
    ]
    return {
        "total_joyas": len(rows),
        "total_stock": total_stock,
        "joyas": joyas,
    }


def list_items(store, request: ListRequest):
    query, params = build_list_query(request)
    rows = store.fetch_all(query, params)
    return summarize_items(rows)


def list_filter_rows(store, filters: InventoryFilters):
    query, params = build_filter_query(filters)
    return store.fetch_all(query, params)
