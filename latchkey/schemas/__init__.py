"""HTTP request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities. Wire names follow the web client
(camelCase where the client sends camelCase).
"""
