from uuid import UUID

from fastapi import Header


async def get_caller_id(x_user_id: UUID = Header(..., alias="X-User-Id")) -> UUID:
    """Id of the user making the request.

    Sign-in happens in front of this service, which forwards the authenticated
    user's id in the X-User-Id header.
    """
    return x_user_id
