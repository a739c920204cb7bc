import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from notebase.core.config import settings
from notebase.core.database import engine, Base, SessionLocal
from notebase.core.errors import NotebaseError
from notebase.routers import health, databases, pages, dashboards, search, assist, navigation
from notebase.services.seed_service import seed_demo_data

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

# Init DB
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()
    yield


app = FastAPI(
    title="Notebase API",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(NotebaseError)
async def notebase_error_handler(request: Request, exc: NotebaseError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Routes
app.include_router(health.router, prefix="/health")
app.include_router(databases.router, prefix="/api")
app.include_router(pages.router, prefix="/api")
app.include_router(dashboards.router, prefix="/api")
app.include_router(search.router, prefix="/api")
app.include_router(assist.router, prefix="/api")
app.include_router(navigation.router, prefix="/api")
