"""Infrastructure adapters for the tenant management context."""
