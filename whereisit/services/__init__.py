"""
Services Module
Business logic layer for the application.

Services contain the core business logic and database operations.
They are called by API endpoints and keep the controllers thin. Every
service receives the request's Session, flushes, and leaves the commit to
the endpoint.
"""
