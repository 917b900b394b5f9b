"""HTTP middleware: timeout, request size limit, request ID.

Applied in main app; order matters (first added = outermost).
"""

from app.middleware.request_id import RequestIDMiddleware
from app.middleware.request_size_limit import (
    MULTIPART_OVERHEAD_BYTES,
    RequestSizeLimitMiddleware,
)
from app.middleware.timeout import TimeoutMiddleware

__all__ = [
    "MULTIPART_OVERHEAD_BYTES",
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "TimeoutMiddleware",
]
