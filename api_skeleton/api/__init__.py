"""HTTP API layer built on FastAPI.

Key components:
- **main**: application factories for the API and admin applications
- **middleware**: correlation IDs, request logging and exception handlers
- **pagination**: page selection and navigation links for list endpoints
- **validation**: checking outgoing bodies against declared schemas
- **security**: HTTP Basic authentication dependency
- **routes**: the pets resource and the admin meta endpoint
- **schemas**: Pydantic models for error and resource documents
- **utils**: orjson response rendering
"""
