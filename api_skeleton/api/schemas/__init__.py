"""Pydantic models for API documents.

- **errors**: the standard error response
- **pets**: JSON:API documents of the pets resource
"""
