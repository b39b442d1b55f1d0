"""API routers.

- **pets**: example paginated resource served by the main application
- **meta**: build metadata served by the admin application
"""
