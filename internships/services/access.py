"""
Who may act on a given internship.

Role checks on the views only say what kind of user is calling; these
checks tie the caller to the internship itself. Admins, the enterprise
cell and internal calls (actor=None) are not restricted.
"""
from rest_framework.exceptions import PermissionDenied

from authentication.models import User

UNRESTRICTED_ROLES = (User.Role.ADMIN, User.Role.ENTERPRISE_CELL)


def is_industry_owner(actor, internship):
    return actor.pk in (internship.industry_supervisor_id, internship.created_by_id)


def check_manager(actor, internship):
    """Industry partners only manage internships they posted or supervise."""
    if actor is None or actor.role in UNRESTRICTED_ROLES:
        return
    if actor.role == User.Role.INDUSTRY and is_industry_owner(actor, internship):
        return
    raise PermissionDenied("You can only manage internships you posted or supervise.")


def check_report_reader(actor, internship):
    """
    Supervisors read reports only for internships they are linked to.
    Students are limited to their own report by the caller.
    """
    if actor is None or actor.role in UNRESTRICTED_ROLES or actor.role == User.Role.STUDENT:
        return
    if actor.role == User.Role.FACULTY and internship.faculty_links.filter(faculty__user=actor).exists():
        return
    if actor.role == User.Role.INDUSTRY and is_industry_owner(actor, internship):
        return
    raise PermissionDenied("You are not supervising this internship.")
