"""API Skeleton: a FastAPI server bootstrap for read-only JSON:API services.

Architecture Overview:
- **API Layer**: application factories, middleware, authentication,
  pagination and outgoing response validation
- **Core Layer**: configuration, logging, exceptions and request context
- **Infrastructure Layer**: the in-memory data source behind the example
  resource
"""
