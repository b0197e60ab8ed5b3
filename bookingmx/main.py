import yaml
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from bookingmx.infrastructure.config import settings
from bookingmx.infrastructure.database import Base, engine
from bookingmx.infrastructure.logging_config import configure_logging
from bookingmx.presentation.routers import router

configure_logging()

app = FastAPI()


# Use the contractual schema
def custom_openapi():
    with open(settings.openapi_path) as f:
        return yaml.safe_load(f)


@app.on_event("startup")
def _log_startup() -> None:
    logger.info(f"Reservations API ready (store_backend={settings.store_backend})")


app.openapi = custom_openapi
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
Base.metadata.create_all(bind=engine)
app.include_router(router)
