class CatalogError(Exception):
    """Base exception for the real estate catalog."""


class ConfigurationError(CatalogError):
    """Raised when an environment variable holds an invalid value."""


class PropertyNotFoundError(CatalogError):
    """Raised when no property matches the given identifier."""

    def __init__(self, property_id: str):
        self.property_id = property_id
        super().__init__(f"Property '{property_id}' not found.")
