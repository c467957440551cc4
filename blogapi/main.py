import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blogapi.config import settings
from blogapi.database import engine, init_models
from blogapi.errors import register_exception_handlers
from blogapi.middleware import TimingMiddleware
from blogapi.routers import comments, posts, users

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await init_models(engine)
    logger.info("Blog API started (env=%s)", settings.APP_ENV)
    yield
    # Shutdown
    await engine.dispose()
    logger.info("Blog API stopped")


app = FastAPI(
    title="Blog API",
    description="Posts, comments and users over a relational store",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(posts.router)
app.include_router(comments.router)
app.include_router(users.router)


@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
