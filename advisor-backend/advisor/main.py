from contextlib import asynccontextmanager

from fastapi import FastAPI
from advisor.transform import router as transform_router
from advisor.cache import build_cache_from_env
from advisor.crs.resolver import get_resolver
from advisor.logging_setup import configure_logging, logging_middleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Cache lives on the serving event loop; no-op when Redis is not configured
    app.state.cache = await build_cache_from_env()
    try:
        yield
    finally:
        await app.state.cache.close()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="CRS transformation path advisor", lifespan=lifespan)
    app.middleware("http")(logging_middleware)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(transform_router)
    app.state.resolver = get_resolver()
    return app

app = create_app()
