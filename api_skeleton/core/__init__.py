"""Cross-cutting building blocks shared by every layer.

- **config**: Pydantic Settings configuration
- **context**: correlation ID storage in context variables
- **exceptions**: exception hierarchy with error codes and severities
- **error_context**: redaction of sensitive values for logs
- **logging**: Loguru setup and formatters
- **types**: shared type aliases
"""
