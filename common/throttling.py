"""Request rate limits.

Counters live in the "throttle" cache alias, a per-process LocMemCache: limits
are enforced per server instance and reset on restart. Each throttle keys on
the authenticated user id, falling back to the client IP.
"""

from django.core.cache import caches
from rest_framework.throttling import SimpleRateThrottle


class ScopedUserOrIPThrottle(SimpleRateThrottle):
    """Fixed-window throttle keyed by user id or client IP, per scope."""

    cache_alias = "throttle"

    def __init__(self):
        self.cache = caches[self.cache_alias]
        super().__init__()

    def get_cache_key(self, request, view):
        if request.user and request.user.is_authenticated:
            ident = f"user-{request.user.pk}"
        else:
            ident = f"ip-{self.get_ident(request)}"
        return self.cache_format % {"scope": self.scope, "ident": ident}


class PhotoUploadThrottle(ScopedUserOrIPThrottle):
    scope = "photo_upload"


class CheckDomainThrottle(ScopedUserOrIPThrottle):
    scope = "check_domain"


class ContactMessageThrottle(ScopedUserOrIPThrottle):
    scope = "contact"


class VerifySessionThrottle(ScopedUserOrIPThrottle):
    scope = "verify_session"


class CheckoutThrottle(ScopedUserOrIPThrottle):
    scope = "checkout"
