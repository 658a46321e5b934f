from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from inventory.api.routers import router
from inventory.config.settings import get_settings
from inventory.db.base import create_tables
from inventory.exc_handlers import setup_exception_handlers
from inventory.templating import STATIC_DIR

app_settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    yield


app = FastAPI(title=app_settings.APP_NAME, lifespan=lifespan)
setup_exception_handlers(app)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

app.include_router(router)


if __name__ == "__main__":
    uvicorn.run(
        "inventory.main:app",
        host=app_settings.host,
        port=app_settings.port,
        reload=app_settings.DEBUG,
    )
