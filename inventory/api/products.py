import logging
from fastapi import APIRouter, HTTPException, status, Depends, Form, Query, Request
from fastapi.responses import RedirectResponse, StreamingResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from inventory.dao import ProductDAO
from inventory.db.base import get_async_db_session
from inventory.dependencies.auth import get_current_user, get_request_context
from inventory.schemas import (
    RequestContext,
    SProductDetail,
    SProductForm,
    SProductResponse,
)
from inventory.templating import templates
from inventory.utils import products_to_csv
from inventory.config.settings import get_settings

app_settings = get_settings()

logger = logging.getLogger(__name__)

if app_settings.DEBUG:
    logger.setLevel(logging.INFO)
else:
    logger.setLevel(logging.ERROR)

handler = logging.StreamHandler()
formatter = logging.Formatter("%(levelname)s:     %(message)s")
handler.setFormatter(formatter)
logger.addHandler(handler)

router = APIRouter(tags=["Products"])

INVALID_PRODUCT = "A product needs a name, and the price must be a number"


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


def database_error(handler_name: str, e: Exception, detail: str = "A database error occurred."):
    logger.error(f"Database error in {handler_name}: {type(e).__name__}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail
    )


def unexpected_error(handler_name: str, e: Exception):
    logger.error(f"Unexpected error in {handler_name}: {type(e).__name__}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An internal server error occurred.",
    )


def to_view(products):
    return [SProductResponse.model_validate(p) for p in products]


def parse_product_form(name: str, description: str, price: str) -> SProductForm:
    return SProductForm(name=name, description=description, price=price)


@router.get("/products")
async def list_products(
    request: Request,
    search: str = Query("", description="Substring of the product name"),
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        products = await ProductDAO.search_by_name(db, search)
    except SQLAlchemyError as e:
        await db.rollback()
        raise database_error("list_products", e, "Error retrieving products")
    logger.info(f"Retrieved {len(products)} products.")
    return templates.TemplateResponse(
        request,
        "products.html",
        {
            "products": to_view(products),
            "username": ctx.username,
            "search_term": search,
        },
    )


@router.get("/search")
async def search_page(
    request: Request,
    ctx: RequestContext = Depends(get_current_user),
):
    return templates.TemplateResponse(
        request,
        "search.html",
        {"products": [], "search_term": "", "username": ctx.username},
    )


@router.post("/search")
async def search_products(
    request: Request,
    search_term: str = Form("", alias="searchTerm"),
    ctx: RequestContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        products = await ProductDAO.search_by_name(db, search_term)
    except SQLAlchemyError as e:
        await db.rollback()
        raise database_error("search_products", e)
    return templates.TemplateResponse(
        request,
        "search.html",
        {
            "products": to_view(products),
            "search_term": search_term,
            "username": ctx.username,
        },
    )


@router.get("/myproducts")
async def my_products(
    request: Request,
    ctx: RequestContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        products = await ProductDAO.find_by_owner(db, ctx.user_id)
    except SQLAlchemyError as e:
        await db.rollback()
        raise database_error("my_products", e)
    return templates.TemplateResponse(
        request,
        "myproducts.html",
        {"products": to_view(products), "username": ctx.username},
    )


@router.get("/product/create")
async def create_product_page(
    request: Request,
    ctx: RequestContext = Depends(get_current_user),
):
    return templates.TemplateResponse(
        request, "createproduct.html", {"message": None, "username": ctx.username}
    )


@router.post("/product/create")
async def create_product(
    request: Request,
    name: str = Form(""),
    description: str = Form(""),
    price: str = Form(""),
    ctx: RequestContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        product_in = parse_product_form(name, description, price)
    except ValidationError:
        return templates.TemplateResponse(
            request,
            "createproduct.html",
            {"message": INVALID_PRODUCT, "username": ctx.username},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        new_product = await ProductDAO.add(
            db, **product_in.model_dump(), user_id=ctx.user_id
        )
    except SQLAlchemyError as e:
        raise database_error("create_product", e, "Error creating the product")
    except Exception as e:
        await db.rollback()
        raise unexpected_error("create_product", e)
    logger.info(f"Product created with ID: {new_product.id}")
    return redirect("/products")


@router.get("/download")
async def download_products(
    ctx: RequestContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        products = await ProductDAO.find_all(db)
        buf = products_to_csv(products)
    except SQLAlchemyError as e:
        await db.rollback()
        raise database_error("download_products", e)
    except Exception as e:
        raise unexpected_error("download_products", e)

    logger.info(f"User {ctx.user_id} exported {len(products)} products.")
    headers = {"Content-Disposition": 'attachment; filename="products.csv"'}
    return StreamingResponse(buf, media_type="text/csv", headers=headers)


@router.get("/product/{product_id:int}")
async def get_product(
    request: Request,
    product_id: int,
    ctx: RequestContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        product = await ProductDAO.find_one_or_none_by_id(db, product_id)
    except SQLAlchemyError as e:
        await db.rollback()
        raise database_error("get_product", e)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    detail = SProductDetail.model_validate(product)
    detail.is_owner = product.user_id == ctx.user_id
    return templates.TemplateResponse(
        request,
        "product.html",
        {"product": detail, "is_owner": detail.is_owner, "username": ctx.username},
    )


async def get_owned_product_or_404(db: AsyncSession, product_id: int, ctx: RequestContext):
    """Missing and not-owned both look like 404 to the caller."""
    product = await ProductDAO.find_one_or_none_by_id(db, product_id)
    if not product or product.user_id != ctx.user_id:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("/product/{product_id:int}/edit")
@router.get("/product/{product_id:int}/update")
async def edit_product_page(
    request: Request,
    product_id: int,
    ctx: RequestContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        product = await get_owned_product_or_404(db, product_id, ctx)
    except SQLAlchemyError as e:
        await db.rollback()
        raise database_error("edit_product_page", e)
    return templates.TemplateResponse(
        request,
        "edit-product.html",
        {
            "product": SProductResponse.model_validate(product),
            "message": None,
            "username": ctx.username,
        },
    )


@router.post("/product/{product_id:int}/edit")
@router.post("/product/{product_id:int}/update")
async def update_product(
    request: Request,
    product_id: int,
    name: str = Form(""),
    description: str = Form(""),
    price: str = Form(""),
    ctx: RequestContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        try:
            product_in = parse_product_form(name, description, price)
        except ValidationError:
            product = await get_owned_product_or_404(db, product_id, ctx)
            return templates.TemplateResponse(
                request,
                "edit-product.html",
                {
                    "product": SProductResponse.model_validate(product),
                    "message": INVALID_PRODUCT,
                    "username": ctx.username,
                },
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        updated = await ProductDAO.update_owned(
            db, product_id, ctx.user_id, **product_in.model_dump()
        )
    except SQLAlchemyError as e:
        await db.rollback()
        raise database_error("update_product", e)
    except HTTPException as e:
        raise e
    except Exception as e:
        await db.rollback()
        raise unexpected_error("update_product", e)

    if updated:
        logger.info(f"Product {product_id} updated successfully.")
    else:
        logger.warning(
            f"Update of product {product_id} by user {ctx.user_id} matched no rows."
        )
    return redirect("/products")


@router.get("/product/{product_id:int}/delete")
async def delete_product_page(
    request: Request,
    product_id: int,
    ctx: RequestContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        product = await ProductDAO.find_one_or_none_by_id(db, product_id)
    except SQLAlchemyError as e:
        await db.rollback()
        raise database_error("delete_product_page", e)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    if product.owner.id != ctx.user_id:
        raise HTTPException(status_code=403, detail="Access denied")
    return templates.TemplateResponse(
        request,
        "delete-product.html",
        {"product": SProductResponse.model_validate(product), "username": ctx.username},
    )


@router.post("/product/{product_id:int}/delete")
async def delete_product(
    product_id: int,
    ctx: RequestContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db_session),
):
    try:
        deleted = await ProductDAO.delete_owned(db, product_id, ctx.user_id)
    except SQLAlchemyError as e:
        await db.rollback()
        raise database_error("delete_product", e)
    except Exception as e:
        await db.rollback()
        raise unexpected_error("delete_product", e)

    if deleted:
        logger.info(f"Product {product_id} deleted successfully.")
    else:
        logger.warning(
            f"Delete of product {product_id} by user {ctx.user_id} matched no rows."
        )
    return redirect("/products")
