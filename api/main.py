import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from calls import router as calls_router
from core import db, log, settings
from customer_tags import router as customer_tags_router
from customers import router as customers_router
from health import router as health_router
from messages import router as messages_router
from tags import router as tags_router
from tasks import router as tasks_router
from users import router as users_router

log.configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan, title=settings.SERVICE_NAME, version=settings.SERVICE_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "request method=%s path=%s status=%s duration_ms=%.1f",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


app.include_router(health_router.router, tags=["health"])
app.include_router(users_router.router, tags=["users"])
app.include_router(customers_router.router, tags=["customers"])
app.include_router(tags_router.router, tags=["tags"])
app.include_router(customer_tags_router.router, tags=["customer-tags"])
app.include_router(calls_router.router, tags=["calls"])
app.include_router(messages_router.router, tags=["messages"])
app.include_router(tasks_router.router, tags=["tasks"])


@app.get("/")
def root() -> dict:
    return {"message": "Welcome to CRM-Café's server"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host(), port=settings.port())
