# scopegate/shared/middleware/__init__.py

from scopegate.shared.middleware.exception_middleware import AsyncExceptionMiddleware
from scopegate.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware
from scopegate.shared.middleware.security_headers_middleware import AsyncSecurityHeadersMiddleware

# Export all for easy imports
__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
    "AsyncSecurityHeadersMiddleware"
]
