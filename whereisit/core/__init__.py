"""
Core Module
Configuration, constants and the domain error taxonomy.
"""
