"""Change-notification polling endpoint.

Clients remember the versions they last saw and refetch any collection whose
channel version moved.
"""

from fastapi import APIRouter, Depends

from restodesk.core.security import get_current_profile
from restodesk.models.user import Profile
from restodesk.services.change_feed import change_feed

router: APIRouter = APIRouter()


@router.get("")
def get_change_versions(_: Profile = Depends(get_current_profile)) -> dict[str, dict[str, int]]:
    return {"versions": change_feed.versions()}
