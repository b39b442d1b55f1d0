"""API-specific helpers: orjson response rendering and body decoding."""
