"""Infrastructure services: outbound API clients and execution logging."""
