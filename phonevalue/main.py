from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from phonevalue.core.config import settings
from phonevalue.core.exceptions import register_exception_handlers
from phonevalue.core.logger import get_logger
from phonevalue.core.middleware import log_requests
from phonevalue.routes.quote_router import quote_router

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):

    logger.info(f" Server is running on http://localhost:{settings.PORT}")

    yield


    logger.info(" Application shutdown initiated")

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)
register_exception_handlers(app)
app.include_router(quote_router)


def run() -> None:
    uvicorn.run("phonevalue.main:app", host=settings.HOST, port=settings.PORT)
