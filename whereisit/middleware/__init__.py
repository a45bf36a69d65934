"""
Middleware Module
CORS and error handling for the FastAPI application.
"""
