"""swift-backend: MongoDB-backed users API seeded from JSONPlaceholder."""

__version__ = "1.0.0"
