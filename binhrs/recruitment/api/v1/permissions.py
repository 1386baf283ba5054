from rest_framework.permissions import BasePermission


class IsRHUser(BasePermission):
    def has_permission(self, request, view):
        return bool(request.user and getattr(request.user, 'is_rh', False))


class IsRHOrManager(BasePermission):
    """
    Any active staff member. Whether a manager is assigned to the
    application's vacancy is checked on the object.
    """
    def has_permission(self, request, view):
        user = request.user
        return bool(
            user and (getattr(user, 'is_rh', False) or getattr(user, 'is_manager', False))
        )

    def has_object_permission(self, request, view, obj):
        if request.user.is_rh:
            return True
        return obj.vacancy.manager_id == request.user.id
