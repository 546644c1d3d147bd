import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import Base, engine

# Import all models so they are registered with Base.metadata before create_all
import app.models  # noqa: F401

from app.api.routes import app_routes, auth, shipments, users

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
# Suppress SQL echo/logging (engine already has echo=False)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.warning(
            "Database not available (tables not created): %s. "
            "Set DATABASE_URL or db_* env vars and ensure PostgreSQL is running.",
            e,
        )
    # Seed the bootstrap admin account if missing
    try:
        from app.seed import seed_all_if_empty

        seed_all_if_empty()
    except Exception as e:
        logger.warning("Seed skipped (non-fatal): %s", e)
    yield


app = FastAPI(
    title="Courier Track API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(app_routes.router, prefix="/api")
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(shipments.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.env == "development",
    )
