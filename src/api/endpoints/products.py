import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.api.dependencies import get_commerce_client, get_proxy_config
from src.error_handler import error_handler
from src.integrations.contracts.commerce import CommerceClient, ProductPage, UpstreamError
from src.integrations.policy.stock_normalizer import normalize_stock
from src.utils.config_loader import ProxyConfig

logger = logging.getLogger(__name__)

api = APIRouter()
products_api = api


def _forwarded_params(request: Request) -> Dict[str, Any]:
    """Query parameters to pass upstream; repeated keys (``include=1&include=2``) become lists."""
    params: Dict[str, Any] = {}
    for key in request.query_params.keys():
        values = request.query_params.getlist(key)
        params[key] = values if len(values) > 1 else values[0]
    return params


def _page_to_dict(page: ProductPage) -> Dict[str, Any]:
    return {
        "products": [normalize_stock(product) for product in page.products],
        "total": page.total,
        "totalPages": page.total_pages,
    }


@api.get("/products", tags=["Products"])
async def list_products(
    request: Request,
    page: int = 1,
    per_page: Optional[int] = None,
    client: CommerceClient = Depends(get_commerce_client),
    cfg: ProxyConfig = Depends(get_proxy_config),
):
    """
    List products. Any additional query parameters (category, orderby, search...)
    are forwarded to the store unchanged.
    """
    per_page = per_page or cfg.catalog.per_page
    logger.info("Fetching products page %s, per_page %s", page, per_page)
    params = {**_forwarded_params(request), "page": page, "per_page": per_page}
    try:
        product_page = await client.list_products(params)
        return _page_to_dict(product_page)
    except Exception as e:
        return JSONResponse(status_code=500, content=error_handler.error_payload("Failed to fetch products", e))


@api.get("/products/featured", tags=["Products"])
async def list_featured_products(
    per_page: Optional[int] = None,
    client: CommerceClient = Depends(get_commerce_client),
    cfg: ProxyConfig = Depends(get_proxy_config),
):
    per_page = per_page or cfg.catalog.featured_per_page
    logger.info("Fetching featured products, per_page %s", per_page)
    try:
        product_page = await client.list_products({"featured": "true", "per_page": per_page})
        logger.info("Found %d featured products", len(product_page.products))
        return _page_to_dict(product_page)
    except Exception as e:
        return JSONResponse(
            status_code=500,
            content=error_handler.error_payload("Failed to fetch featured products", e),
        )


@api.get("/products/{product_id}", tags=["Products"])
async def get_product(product_id: str, client: CommerceClient = Depends(get_commerce_client)):
    try:
        product = normalize_stock(await client.get_product(product_id))
        logger.info(
            "Product ID %s stock info: stock_quantity=%s stock_status=%s",
            product_id,
            product.get("stock_quantity"),
            product.get("stock_status"),
        )
        return {"product": product}
    except Exception as e:
        return JSONResponse(
            status_code=500,
            content=error_handler.error_payload("Failed to fetch product details", e, {"product_id": product_id}),
        )


@api.get("/related-products", tags=["Products"])
async def list_related_products(
    product_id: Optional[str] = None,
    category_id: Optional[str] = None,
    per_page: Optional[int] = None,
    client: CommerceClient = Depends(get_commerce_client),
    cfg: ProxyConfig = Depends(get_proxy_config),
):
    """Products from the same category, excluding the product itself. Failures yield an empty list."""
    per_page = per_page or cfg.catalog.related_per_page
    logger.info("Fetching related products for product %s in category %s", product_id, category_id)

    if not category_id:
        return JSONResponse(
            status_code=400,
            content={
                "error": "Missing category_id parameter",
                "message": "A category ID is required to fetch related products",
            },
        )

    try:
        product_page = await client.list_products(
            {"category": category_id, "exclude": product_id, "per_page": per_page}
        )
    except UpstreamError as e:
        logger.error("Error fetching related products: %s", e)
        return {"products": []}

    products = [normalize_stock(product) for product in product_page.products]
    logger.info("Found %d related products for product %s", len(products), product_id)
    return {"products": products}
