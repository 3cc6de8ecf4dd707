# internportal/middleware.py
from django.utils.deprecation import MiddlewareMixin
import logging

logger = logging.getLogger(__name__)


class RequestLogMiddleware(MiddlewareMixin):
    """
    Logs who hit which endpoint and how it ended.
    Runs after AuthenticationMiddleware. Token users show up too: DRF
    writes the authenticated user back onto the Django request.
    """

    def process_response(self, request, response):
        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            role = getattr(user, "role", "USER")
        else:
            role = "ANONYMOUS"

        logger.info(f"[{role:15}] {request.method:6} {request.path} -> {response.status_code}")

        return response
