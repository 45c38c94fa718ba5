"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- artists, artworks, exhibitions, orders, media, blog, newsletter, contact:
  storefront and back-office resources
- auth, users, notifications: accounts, login and artist self-service
- dashboard: back-office statistics
- common: shared message and pagination shapes
"""
