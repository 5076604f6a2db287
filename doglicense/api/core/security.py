"""Security utilities such as CORS configuration."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings


def enable_cors(app: FastAPI) -> None:
    """Allow the local Streamlit UI and other localhost clients."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://127.0.0.1",
            "http://localhost",
            f"http://127.0.0.1:{settings.ui_port}",
            f"http://localhost:{settings.ui_port}",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
