import logging

from django.db import transaction
from django.db.models import ProtectedError

from internportal.exceptions import ConflictError
from profiles.models import StudentProfile

from .access import check_manager
from .lookups import get_internship

logger = logging.getLogger(__name__)


def mark_complete(internship_id, actor=None):
    """Closes the internship and credits every assigned student with it."""
    internship = get_internship(internship_id)
    check_manager(actor, internship)

    with transaction.atomic():
        internship.is_complete = True
        internship.save(update_fields=["is_complete", "updated_at"])
        credited = StudentProfile.objects.filter(
            internship_links__internship=internship, did_internship=False
        ).update(did_internship=True)

    logger.info(
        "Internship %s marked complete by %s, %d students credited",
        internship.pk, getattr(actor, "username", "system"), credited,
    )
    return internship


def delete_internship(internship_id, actor=None):
    internship = get_internship(internship_id)
    check_manager(actor, internship)
    try:
        internship.delete()
    except ProtectedError:
        count = internship.tasks.count()
        raise ConflictError(f"Internship {internship.pk} still has {count} task(s) and cannot be deleted.")
    logger.info("Internship %s deleted", internship_id)
