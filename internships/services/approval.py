import logging

from django.db import transaction
from django.db.models import BooleanField, Case, Value, When
from django.utils import timezone

from internships.models import ApprovalEvent, Internship

from .lookups import get_internship

logger = logging.getLogger(__name__)


def toggle_approval(internship_id, actor=None, comment=""):
    """
    Flips Pending <-> Approved with a single UPDATE so two concurrent
    toggles both land. Every flip leaves an ApprovalEvent behind.
    """
    internship = get_internship(internship_id)

    with transaction.atomic():
        Internship.objects.filter(pk=internship.pk).update(
            is_approved=Case(
                When(is_approved=True, then=Value(False)),
                default=Value(True),
                output_field=BooleanField(),
            ),
            updated_at=timezone.now(),
        )
        internship.refresh_from_db(fields=["is_approved", "updated_at"])
        ApprovalEvent.objects.create(
            internship=internship,
            actor=actor,
            is_approved=internship.is_approved,
            comment=comment or "",
        )

    logger.info(
        "Internship %s is now %s (by %s)",
        internship.pk, internship.approval_state, getattr(actor, "username", "system"),
    )
    return internship


def approval_history(internship_id):
    internship = get_internship(internship_id)
    return internship.approval_events.select_related("actor").order_by("-created_at", "-id")
