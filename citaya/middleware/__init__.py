"""HTTP middleware: request size limit and request ID.

Applied in the main app; the last one added is outermost.
"""

from citaya.middleware.request_id import RequestIDMiddleware
from citaya.middleware.request_size_limit import RequestSizeLimitMiddleware

__all__ = ["RequestIDMiddleware", "RequestSizeLimitMiddleware"]
