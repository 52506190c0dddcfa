from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.accounts.roles import role_level
from modules.accounts.services import resolve_actor


class MeView(APIView):
    """GET /api/v1/me -- who the caller is, as seen by the order workflow.

    Front-ends use ``role_class`` to pick the admin console or the
    customer portal, ``can_write`` to hide order actions from read-only
    users and ``role_level`` to order menus by privilege.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        actor = resolve_actor(request.user)
        profile = getattr(request.user, "profile", None)
        role = profile.role if profile is not None else None
        return Response(
            {
                "username": request.user.get_username(),
                "role": role,
                "role_class": str(actor.role) if actor.role is not None else None,
                "role_level": role_level(role),
                "can_write": actor.can_write,
                "customer_id": str(actor.customer_id) if actor.customer_id else None,
            }
        )
