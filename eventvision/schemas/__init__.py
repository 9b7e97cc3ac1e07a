"""
Pydantic schemas for API endpoints.
"""
