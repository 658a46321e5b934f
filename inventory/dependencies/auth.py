from fastapi import Request, status, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.config.settings import get_settings
from inventory.dao import UserSessionDAO
from inventory.db.base import get_async_db_session
from inventory.schemas import RequestContext

app_settings = get_settings()


def get_session_token(request: Request):
    return request.cookies.get(app_settings.session_cookie)


async def get_request_context(
    request: Request, db: AsyncSession = Depends(get_async_db_session)
) -> RequestContext:
    token = get_session_token(request)
    ctx = RequestContext()
    if token:
        user_session = await UserSessionDAO.find_active_by_token(db, token)
        if user_session is not None:
            ctx = RequestContext(
                user_id=user_session.user.id,
                username=user_session.user.username,
                session_token=token,
            )
    # error pages rendered outside the route read it from here
    request.state.ctx = ctx
    return ctx


def get_current_user(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
    if not ctx.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Access denied"
        )
    return ctx
