"""HTTP routes: public catalog and ordering, plus the admin panel API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from storefront.application.check_health import CheckHealthHandler
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.list_products import ListProductsHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.set_variant_stock import SetVariantStockHandler
from storefront.domain.exceptions import StoreError
from storefront.infrastructure.bootstrap import Services
from storefront.infrastructure.web.dependencies import (
    get_services,
    get_settings,
    require_admin,
)
from storefront.infrastructure.web.schemas import (
    PlaceOrderBody,
    SetVariantStockBody,
    order_json,
    placed_order_json,
    product_json,
)

# ---------------------------------------------------------------------------
# Public Router
# ---------------------------------------------------------------------------
public_router = APIRouter(tags=["storefront"])


@public_router.get("/health")
def health(request: Request) -> dict:
    settings = get_settings(request)
    try:
        services = get_services(request)
    except StoreError:
        return {"ok": True, "db": "disconnected", "mail": settings.mail_configured}

    report = CheckHealthHandler(services.product_repo, services.notifier).handle()
    return {
        "ok": True,
        "db": "connected" if report.db_connected else "disconnected",
        "mail": report.mail_configured,
    }


@public_router.get("/products")
def list_products(services: Services = Depends(get_services)) -> dict:
    products = ListProductsHandler(services.product_repo).handle()
    return {"ok": True, "products": [product_json(p) for p in products]}


@public_router.post("/orders", status_code=status.HTTP_201_CREATED)
def place_order(body: PlaceOrderBody, services: Services = Depends(get_services)) -> dict:
    handler = PlaceOrderHandler(
        product_repo=services.product_repo,
        order_repo=services.order_repo,
        notifier=services.notifier,
    )
    placed = handler.handle(body.to_request())
    return placed_order_json(placed)


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(
    prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)


@admin_router.get("/products")
def admin_list_products(services: Services = Depends(get_services)) -> dict:
    products = ListProductsHandler(services.product_repo).handle()
    return {"ok": True, "products": [product_json(p) for p in products]}


@admin_router.put("/products/{product_id}/variants")
def admin_set_variant_stock(
    product_id: int,
    body: SetVariantStockBody,
    services: Services = Depends(get_services),
) -> dict:
    variant = SetVariantStockHandler(services.product_repo).handle(
        product_id=product_id, size=body.size, color=body.color, stock=body.stock
    )
    return {
        "ok": True,
        "productId": product_id,
        "size": variant.size,
        "color": variant.color,
        "stock": variant.stock,
    }


@admin_router.get("/orders")
def admin_list_orders(services: Services = Depends(get_services)) -> dict:
    orders = ListOrdersHandler(services.order_repo).handle()
    return {"ok": True, "orders": [order_json(o) for o in orders]}
