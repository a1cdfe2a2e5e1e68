from flask import Blueprint, g
from app.version import API_PREFIX
from app.utils import ok, auth_required
from app.services.plans import list_plans

plans_bp = Blueprint("plans", __name__, url_prefix=f"{API_PREFIX}/plans")


@plans_bp.route("", methods=["GET"])
@auth_required
def get_plans():
    """
    Plans available to the caller's role, cheapest first
    ---
    tags: [Plans]
    security: [{Bearer: []}]
    responses:
      200: {description: List of plans}
      401: {description: Missing or invalid token}
    """
    return ok([p.to_dict() for p in list_plans(g.role)])
