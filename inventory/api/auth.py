import logging
from fastapi import (
    APIRouter,
    HTTPException,
    status,
    Request,
    Depends,
    Form,
)
from fastapi.responses import RedirectResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from inventory.dao import UserDAO
from inventory.db.base import get_async_db_session
from inventory.dependencies.auth import get_request_context, get_session_token
from inventory.schemas import SUserRegister, SUserAuth, RequestContext
from inventory.templating import templates
from inventory.utils import (
    get_password_hash,
    authenticate_user,
    login_session,
    logout_session,
)
from inventory.config.settings import get_settings

app_settings = get_settings()

logger = logging.getLogger(__name__)

if app_settings.DEBUG:
    logger.setLevel(logging.INFO)
else:
    logger.setLevel(logging.ERROR)

handler = logging.StreamHandler()
formatter = logging.Formatter('%(levelname)s:     %(message)s')
handler.setFormatter(formatter)
logger.addHandler(handler)

router = APIRouter(tags=["Auth"])

INVALID_CREDENTIALS = "Invalid credentials"
ALREADY_REGISTERED = "Username or email already registered"
INVALID_REGISTRATION = "Please enter a username, a valid email and a password"


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/")
async def index(
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_async_db_session),
):
    if not ctx.is_authenticated:
        return redirect("/login")
    try:
        user = await UserDAO.find_one_or_none_by_id(db, ctx.user_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error in index: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="A database error occurred.",
        )
    if not user:
        return redirect("/login")
    return redirect("/products")


@router.get("/login")
async def login_page(request: Request):
    return templates.TemplateResponse(request, "login.html", {"message": None})


@router.post("/login")
async def login_user(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    db: AsyncSession = Depends(get_async_db_session),
):
    credentials = SUserAuth(username=username, password=password)
    try:
        user = await authenticate_user(
            username=credentials.username,
            password=credentials.password,
            db=db,
        )
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Database error in login_user: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="A database error occurred.",
        )

    if user is None:
        logger.info(f"Failed login attempt for username: {credentials.username}")
        return templates.TemplateResponse(
            request,
            "login.html",
            {"message": INVALID_CREDENTIALS},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    response = redirect("/products")
    try:
        await login_session(db, response, user, old_token=get_session_token(request))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Database error in login_user: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="A database error occurred.",
        )
    logger.info(f"User logged in successfully: {user.username}")
    return response


@router.get("/register")
async def register_page(request: Request):
    return templates.TemplateResponse(request, "register.html", {"message": None})


@router.post("/register")
async def register_user(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    email: str = Form(""),
    db: AsyncSession = Depends(get_async_db_session),
):
    def rejected(message: str, status_code: int):
        return templates.TemplateResponse(
            request, "register.html", {"message": message}, status_code=status_code
        )

    try:
        user_data = SUserRegister(username=username, email=email, password=password)
    except ValidationError:
        return rejected(INVALID_REGISTRATION, status.HTTP_400_BAD_REQUEST)

    try:
        existing = await UserDAO.find_by_username_or_email(
            db, user_data.username, user_data.email
        )
        if existing:
            return rejected(ALREADY_REGISTERED, status.HTTP_409_CONFLICT)

        user = await UserDAO.add(
            db,
            username=user_data.username,
            email=user_data.email,
            password=get_password_hash(user_data.password),
        )
        response = redirect("/login")
        await login_session(db, response, user, old_token=get_session_token(request))
    except IntegrityError:
        # lost the race against a concurrent registration
        await db.rollback()
        return rejected(ALREADY_REGISTERED, status.HTTP_409_CONFLICT)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Database error in register_user: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="A database error occurred.",
        )

    logger.info(f"User registered successfully: {user.username}")
    return response


@router.get("/logout")
async def logout_user(
    request: Request,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_async_db_session),
):
    response = redirect("/login")
    try:
        await logout_session(db, response, get_session_token(request))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Database error in logout_user: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="A database error occurred.",
        )
    if ctx.is_authenticated:
        logger.info(f"User logged out successfully for user: {ctx.user_id}")
    return response
