"""Pytest configuration and fixtures."""

import sqlite3

import pytest
from fastapi.testclient import TestClient

from joyas.db import get_store
from joyas.exceptions import StoreError
from joyas.main import app

CATEGORIAS = ["aros", "collar", "anillo"]
METALES = ["oro", "plata"]


class SqliteStore:
    """In-memory stand-in for InventoryStore that executes the generated SQL."""

    def __init__(self, rows):
        self.conn = sqlite3.connect(":memory:", check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute(
            "CREATE TABLE inventario (id INTEGER PRIMARY KEY, nombre TEXT, precio REAL, "
            "stock INTEGER, categoria TEXT, metal TEXT)"
        )
        self.conn.executemany(
            "INSERT INTO inventario VALUES (:id, :nombre, :precio, :stock, :categoria, :metal)",
            rows,
        )
        self.queries = []

    def fetch_all(self, query, params=()):
        self.queries.append((query, list(params)))
        cursor = self.conn.execute(query.replace("%s", "?"), list(params))
        return [dict(row) for row in cursor.fetchall()]

    def close(self):
        self.conn.close()


class FailingStore:
    def fetch_all(self, query, params=()):
        raise StoreError('relation "inventario" does not exist')


def make_rows(count=25):
    return [
        {
            "id": i,
            "nombre": f"Joya {i}",
            "precio": float(i * 1000),
            "stock": i % 7,
            "categoria": CATEGORIAS[i % len(CATEGORIAS)],
            "metal": METALES[i % len(METALES)],
        }
        for i in range(1, count + 1)
    ]


@pytest.fixture
def rows():
    return make_rows()


@pytest.fixture
def store(rows):
    store = SqliteStore(rows)
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def failing_client():
    app.dependency_overrides[get_store] = lambda: FailingStore()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
