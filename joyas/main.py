# uvicorn joyas.main:app --host 0.0.0.0 --port 3000 --reload
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
import uvicorn

from joyas.api import api
from joyas.config import APP_HOST, APP_PORT, setup_logging
from joyas.db import InventoryStore

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.store = InventoryStore()
    logger.info("Servidor corriendo en http://localhost:%s", APP_PORT)
    try:
        yield
    finally:
        app.state.store.close()


app = FastAPI(title="Joyas API", lifespan=lifespan)


@app.middleware("http")
async def report_request(request: Request, call_next):
    path = request.url.path
    if request.url.query:
        path += f"?{request.url.query}"
    logger.info("Ruta consultada: %s %s", request.method, path)
    return await call_next(request)


app.include_router(api.router)


def run():
    uvicorn.run("joyas.main:app", host=APP_HOST, port=APP_PORT)


if __name__ == "__main__":
    run()
