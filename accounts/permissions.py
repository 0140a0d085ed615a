from rest_framework.permissions import BasePermission

from .policy import Decision, authorize
from .profiles import get_current_user


class PolicyPermission(BasePermission):
    """
    Checks the view against the access policy before any object lookup.

    Viewsets declare ``policy_operations = {"action": Operation, ...}``; plain
    API views declare a single ``policy_operation``. Anything not mapped only
    requires an authenticated caller.
    """

    def has_permission(self, request, view):
        caller = get_current_user(request)
        operations = getattr(view, "policy_operations", {})
        operation = operations.get(getattr(view, "action", None)) or getattr(view, "policy_operation", None)
        if operation is None:
            return caller is not None
        # UNAUTHORIZED maps to False as well; DRF then answers 401 or 403
        # depending on the authenticator.
        return authorize(caller, operation) is Decision.ALLOW
