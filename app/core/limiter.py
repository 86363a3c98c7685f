"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Only the operator routes are limited: the
webhook is secret-gated and a Strapi bulk publish arrives as one burst from
one address, so a 429 there would drop invalidations.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

ADMIN_LIMIT = "10/minute"

limit_admin = limiter.limit(ADMIN_LIMIT)
