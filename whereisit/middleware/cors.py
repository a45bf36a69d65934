"""
CORS Middleware Configuration
Enables Cross-Origin Resource Sharing for the web build of the mobile app.

Native clients do not send an Origin header, so only browser-based clients
(Expo web during development, the hosted web app) are affected.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def setup_cors(app: FastAPI) -> None:
    """
    Configure CORS middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
    """

    # Allowed origins (web clients)
    origins = [
        "http://localhost:8081",  # Expo web dev server
        "http://127.0.0.1:8081",
        "http://localhost:19006",  # Legacy Expo web port
        "https://whereisit.app",  # Hosted web app
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,  # Allow auth headers
        allow_methods=["*"],
        allow_headers=["*"],
    )
