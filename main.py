"""Application entry point for the Meal Planner API.

Defines the FastAPI app, middleware, exception handlers and includes API
routers from the `api` package. The `lifespan` handler initializes the DB
on startup.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from api.grocery_lists import router as grocery_lists_router
from api.meal_plans import router as meal_plans_router
from api.meals import router as meals_router
from api.profiles import router as profiles_router
from core.error_handlers import register_exception_handlers
from core.exceptions import StoreError
from core.logger import get_logger
from database import init_db, models
from database.deps import get_db_read

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Fastapi lifespan context: initialize resources before serving requests."""
    init_db()
    yield


app = FastAPI(title="Meal Planner API", version="1.0.0", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests and their responses."""
    logger.info("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Request error: %s %s", request.method, request.url.path)
        raise
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


@app.get("/health")
def health(db: Session = Depends(get_db_read)):
    """Return basic health status and database connectivity.

    Raises:
        StoreError: If the database cannot be queried.
    """
    try:
        db.query(models.Meal.id).first()
    except Exception as e:
        logger.exception("Health check failed")
        raise StoreError(f"Database health check failed: {e}", operation="select", table="meals")
    return {"status": "healthy", "database": "connected"}


app.include_router(profiles_router)
app.include_router(meals_router)
app.include_router(meal_plans_router)
app.include_router(grocery_lists_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
