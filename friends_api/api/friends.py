"""Friend profile endpoints"""

import logging

import sqlalchemy
from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt
from pydantic.alias_generators import to_camel

from friends_api import database as db
from friends_api.api import auth

router = APIRouter(
    prefix="/api/v1/friends",
    tags=["friends"],
)

log = logging.getLogger(__name__)

# Only accepted friendship edges count as friends
STATUS_ACCEPTED = "accepted"

# Largest value the INTEGER id columns hold
MAX_ID = 2**31 - 1


# Response models
class FriendProfileResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: PositiveInt
    full_name: str = Field(min_length=1)
    phone_number: str = Field(min_length=1)
    total_friend_count: NonNegativeInt
    mutual_friend_count: NonNegativeInt


# Accepted out-degree per user. Used as a join target, never executed alone.
TOTAL_FRIEND_COUNT_SQL = """
    SELECT user_id, COUNT(friend_user_id) AS total_friend_count
    FROM friendships
    WHERE status = :accepted
    GROUP BY user_id
"""


def _mutual_friend_count(connection, user_id: int, friend_user_id: int) -> int:
    """Count third parties both users have an accepted edge to."""
    row = connection.execute(
        sqlalchemy.text(
            """
            SELECT COUNT(f2.friend_user_id) AS mutual_friend_count
            FROM friendships f1
            JOIN friendships f2 ON f1.friend_user_id = f2.friend_user_id
            WHERE f1.user_id = :user_id
            AND f2.user_id = :friend_user_id
            AND f1.status = :accepted
            AND f2.status = :accepted
            """
        ),
        {"user_id": user_id, "friend_user_id": friend_user_id, "accepted": STATUS_ACCEPTED}
    ).fetchone()
    if row is None or row.mutual_friend_count is None:
        return 0
    return int(row.mutual_friend_count)


def _get_friend_row(connection, user_id: int, friend_user_id: int):
    """Fetch the friend's profile and total friend count.

    Returns None unless user_id has an accepted edge to friend_user_id and
    the friend has a users row.
    """
    return connection.execute(
        sqlalchemy.text(
            f"""
            SELECT
                friends.id,
                friends.full_name,
                friends.phone_number,
                COALESCE(user_total_friend_count.total_friend_count, 0) AS total_friend_count
            FROM users friends
            JOIN friendships ON friendships.friend_user_id = friends.id
            LEFT JOIN ({TOTAL_FRIEND_COUNT_SQL}) user_total_friend_count
                ON user_total_friend_count.user_id = friends.id
            WHERE friendships.user_id = :user_id
            AND friendships.friend_user_id = :friend_user_id
            AND friendships.status = :accepted
            """
        ),
        {"user_id": user_id, "friend_user_id": friend_user_id, "accepted": STATUS_ACCEPTED}
    ).fetchone()


def get_friend_profile(connection, user_id: int, friend_user_id: int) -> FriendProfileResponse:
    """Build the profile of friend_user_id as seen by user_id.

    Raises HTTPException(404) when there is no accepted friendship from
    user_id to friend_user_id. A result that does not fit
    FriendProfileResponse raises pydantic.ValidationError.
    """
    mutual_friend_count = _mutual_friend_count(connection, user_id, friend_user_id)

    friend = _get_friend_row(connection, user_id, friend_user_id)
    if not friend:
        log.info("No accepted friendship %s -> %s", user_id, friend_user_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Friend not found"
        )

    log.debug(
        "Friend %s: total_friend_count=%s mutual_friend_count=%s",
        friend.id, friend.total_friend_count, mutual_friend_count
    )

    return FriendProfileResponse.model_validate({
        "id": friend.id,
        "full_name": friend.full_name,
        "phone_number": friend.phone_number,
        "total_friend_count": friend.total_friend_count,
        "mutual_friend_count": mutual_friend_count,
    })


# ==================== Individual Friend Endpoints ====================

@router.get("/{friend_user_id}", response_model=FriendProfileResponse)
def get_friend(
    friend_user_id: int = Path(gt=0, le=MAX_ID),
    user_id: int = Depends(auth.get_current_user_id),
):
    """Get a specific friend's profile with friend counts."""
    with db.engine.begin() as connection:
        return get_friend_profile(connection, user_id, friend_user_id)
