"""Middleware and exception handlers shared by both applications.

- **RequestContextMiddleware**: correlation IDs bound to every log record
- **RequestLoggingMiddleware**: request start/completion logging with timing
- **error_handler**: exception handlers producing the standard error body

Registration order in the factories makes the request context middleware
run first, so request logs already carry the correlation ID.
"""
