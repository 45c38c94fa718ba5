"""
Core models for Talanta Gallery.

- domain/: enums shared by entities, services and the API
- io/: Pydantic request/response schemas for the API
"""
