import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from staffhub.api.health import router as health_router
from staffhub.api.root import router as root_router
from staffhub.core.config import settings
from staffhub.core.logging_config import configure_logging
from staffhub.graphql.schema import create_graphql_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("staffhub")

app = FastAPI(title="StaffHub")

# CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root_router)
app.include_router(health_router)
app.include_router(create_graphql_router(), prefix="/graphql")

logger.info("StaffHub API ready (env=%s)", settings.APP_ENV)
