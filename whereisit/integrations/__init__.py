"""
Integrations Module
Clients for external services.
"""
