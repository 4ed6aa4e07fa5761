"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Server-side uploads are for admin/batch use; clients upload directly to the CDN.
UPLOAD_LIMIT = "30/minute"
DELETE_LIMIT = "60/minute"

limit_upload = limiter.limit(UPLOAD_LIMIT)
limit_delete = limiter.limit(DELETE_LIMIT)
