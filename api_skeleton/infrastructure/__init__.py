"""Infrastructure layer: where resource data comes from."""
