"""FastAPI routes for the Checkout domain: orders, order emails and products."""

import json

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from checkout.api.schemas import (
    CreateProductRequest,
    EmailDispatchData,
    EmailDispatchResponse,
    LineItemResponse,
    OrderEnvelope,
    OrderListEnvelope,
    OrderResponse,
    OrderSummary,
    PaymentInfoResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    ProductEnvelope,
    ProductListEnvelope,
    ProductResponse,
    SendOrderEmailRequest,
    UpdateInventoryRequest,
    VariantGroupSchema,
)
from checkout.catalogue.management import CreateProduct, SeedProducts, get_active_product, list_active_products
from checkout.catalogue.product import Product
from checkout.domain import checkout
from checkout.inventory.adjustment import decrement_stock
from checkout.notification.dispatcher import OrderNotificationDispatcher, get_dispatcher
from checkout.order.notification_status import mark_notified
from checkout.order.order import Order
from checkout.order.placement import place_order

order_router = APIRouter(prefix="/orders", tags=["orders"])
email_router = APIRouter(prefix="/email", tags=["email"])
product_router = APIRouter(prefix="/products", tags=["products"])


async def _in_worker_thread(fn, *args):
    """Run blocking mail transport I/O on the threadpool, inside the checkout domain context."""

    def _call():
        with checkout.domain_context():
            return fn(*args)

    return await run_in_threadpool(_call)


def _order_response(order: Order) -> OrderResponse:
    customer = order.customer_info
    return OrderResponse(
        order_number=order.order_number,
        items=[
            LineItemResponse(
                product_id=str(item.product_id),
                product_name=item.product_name,
                price=item.unit_price,
                quantity=item.quantity,
                selected_variants=item.variant_list,
                image=item.image,
                subtotal=item.subtotal,
            )
            for item in order.items
        ],
        customer_info={
            "full_name": customer.full_name,
            "email": customer.email,
            "phone": customer.phone,
            "address": customer.address,
            "city": customer.city,
            "state": customer.state,
            "zip_code": customer.zip_code,
        },
        payment_info=PaymentInfoResponse(
            card_number=order.payment_info.card_number,
            expiry_date=order.payment_info.expiry_date,
        ),
        subtotal=order.pricing.subtotal,
        shipping=order.pricing.shipping_cost,
        tax=order.pricing.tax_total,
        total=order.pricing.grand_total,
        status=order.status,
        transaction_id=order.transaction_id,
        notes=order.notes,
        email_sent=order.email_sent,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        image=product.image,
        inventory=product.inventory,
        is_active=product.is_active,
        variants=[
            VariantGroupSchema(name=group.name, value=group.value, options=group.option_list)
            for group in product.variants
        ],
        created_at=product.created_at,
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def create_order(body: PlaceOrderRequest) -> PlaceOrderResponse:
    order = place_order(
        items=[item.model_dump(exclude={"price"}) for item in body.items],
        customer_info=body.customer_info.model_dump(),
        payment_info=body.payment_info.model_dump(),
    )
    return PlaceOrderResponse(
        data=OrderSummary(
            order_number=order.order_number,
            status=order.status,
            transaction_id=order.transaction_id,
            total=order.pricing.grand_total,
            error=order.notes,
        )
    )


@order_router.get("", response_model=OrderListEnvelope)
async def list_orders() -> OrderListEnvelope:
    orders = current_domain.repository_for(Order).list_newest_first()
    return OrderListEnvelope(count=len(orders), data=[_order_response(order) for order in orders])


@order_router.get("/{order_number}", response_model=OrderEnvelope)
async def get_order(order_number: str) -> OrderEnvelope:
    order = current_domain.repository_for(Order).get_by_order_number(order_number)
    return OrderEnvelope(data=_order_response(order))


@order_router.patch("/{order_number}/email-status", response_model=OrderEnvelope)
async def update_email_status(order_number: str) -> OrderEnvelope:
    order = mark_notified(order_number)
    return OrderEnvelope(message="Email status updated", data=_order_response(order))


# ---------------------------------------------------------------------------
# Email Router
# ---------------------------------------------------------------------------
@email_router.post("/send-order-email", response_model=EmailDispatchResponse)
async def send_order_email(
    body: SendOrderEmailRequest,
    dispatcher: OrderNotificationDispatcher = Depends(get_dispatcher),
) -> EmailDispatchResponse:
    if not body.order_number:
        raise ValidationError({"order_number": ["Order number is required"]})

    order = current_domain.repository_for(Order).get_by_order_number(body.order_number)
    result = await _in_worker_thread(dispatcher.send, order)

    if result.simulated:
        return EmailDispatchResponse(
            message="Email simulation completed (no SMTP credentials)",
            data=EmailDispatchData(
                order_number=result.order_number,
                email_type=result.email_type,
                simulated_only=True,
            ),
        )
    return EmailDispatchResponse(
        message="Email sent successfully",
        data=EmailDispatchData(
            order_number=result.order_number,
            email_type=result.email_type,
            recipient=result.recipient,
        ),
    )


@email_router.get("/test-connection")
async def test_email_connection(dispatcher: OrderNotificationDispatcher = Depends(get_dispatcher)):
    if not dispatcher.is_configured:
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Mailtrap credentials not configured"},
        )

    outcome = await _in_worker_thread(dispatcher.verify_connection)
    if outcome.get("ok"):
        return {"success": True, "message": "Email connection successful"}
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Email connection failed", "error": outcome.get("error")},
    )


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
@product_router.get("", response_model=ProductListEnvelope)
async def list_products() -> ProductListEnvelope:
    products = list_active_products()
    return ProductListEnvelope(count=len(products), data=[_product_response(p) for p in products])


@product_router.post("", status_code=201, response_model=ProductEnvelope)
async def create_product(body: CreateProductRequest) -> ProductEnvelope:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        image=body.image,
        inventory=body.inventory,
        is_active=body.is_active,
        variants=json.dumps([group.model_dump() for group in body.variants]),
    )
    product_id = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ProductEnvelope(message="Product created successfully", data=_product_response(product))


@product_router.post("/seed", status_code=201, response_model=ProductListEnvelope)
async def seed_products() -> ProductListEnvelope:
    product_ids = current_domain.process(SeedProducts(), asynchronous=False)
    repo = current_domain.repository_for(Product)
    products = [repo.get(product_id) for product_id in product_ids]
    return ProductListEnvelope(count=len(products), data=[_product_response(p) for p in products])


@product_router.patch("/inventory", response_model=ProductEnvelope)
async def update_inventory(body: UpdateInventoryRequest) -> ProductEnvelope:
    try:
        product = decrement_stock(body.product_id, body.quantity)
    except ObjectNotFoundError:
        raise ObjectNotFoundError("Product not found") from None
    return ProductEnvelope(message="Inventory updated successfully", data=_product_response(product))


@product_router.get("/{product_id}", response_model=ProductEnvelope)
async def get_product(product_id: str) -> ProductEnvelope:
    return ProductEnvelope(data=_product_response(get_active_product(product_id)))
