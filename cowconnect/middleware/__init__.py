"""HTTP middleware: request size limit, request ID, security headers.

Applied in main app; order matters (last added = outermost).
"""

from cowconnect.middleware.request_id import RequestIDMiddleware
from cowconnect.middleware.request_size_limit import RequestSizeLimitMiddleware
from cowconnect.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
]
