"""FastAPI application bootstrap."""
from __future__ import annotations

from fastapi import FastAPI

from .core.config import init_storage, settings
from .core.logging import register_middleware, setup_logging
from .core.security import enable_cors
from .routers import applications, draft, health, steps

setup_logging(settings.log_level.upper())
init_storage()

app = FastAPI(title="Dog License API", version="0.1.0")

register_middleware(app)
enable_cors(app)

app.include_router(health.router)
app.include_router(draft.router)
app.include_router(steps.router)
app.include_router(applications.router)
app.include_router(applications.tracking_router)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Dog License API", "health": "/health", "tracking": settings.tracking_route}
