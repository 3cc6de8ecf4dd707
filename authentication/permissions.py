from rest_framework import permissions


class RolePermission(permissions.BasePermission):
    """
    Grants access when the user's role is in `allowed_roles`.
    Admins always pass.
    """
    allowed_roles = ()

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        return request.user.role == 'ADMIN' or request.user.role in self.allowed_roles


class IsInstitutionAdmin(RolePermission):
    message = "You must be an Institution Admin to perform this action."


class IsStudent(permissions.BasePermission):
    def has_permission(self, request, view):
        return request.user.is_authenticated and request.user.role == 'STUDENT'


class IsEnterpriseCell(RolePermission):
    message = "Only the enterprise cell can approve internships."
    allowed_roles = ('ENTERPRISE_CELL',)


class IsSupervisor(RolePermission):
    """Faculty or industry supervisors (task issuers and graders)."""
    allowed_roles = ('FACULTY', 'INDUSTRY')


class CanManageInternships(RolePermission):
    """Internships are posted by the enterprise cell or an industry partner."""
    allowed_roles = ('ENTERPRISE_CELL', 'INDUSTRY')


class IsStaffOrSupervisor(RolePermission):
    """Everyone except students: report and roster readers."""
    allowed_roles = ('FACULTY', 'INDUSTRY', 'ENTERPRISE_CELL')
