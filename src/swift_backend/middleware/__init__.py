from swift_backend.middleware.error_middleware import ErrorIsolationMiddleware

__all__ = ["ErrorIsolationMiddleware"]
