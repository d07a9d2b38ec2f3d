"""Pydantic request/response schemas for the Checkout API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Field names are snake_case in Python and
camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class VariantSelectionSchema(CamelModel):
    name: str
    value: str


class CustomerInfoSchema(CamelModel):
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None


class VariantOptionSchema(CamelModel):
    label: str
    value: str
    in_stock: bool = True
    image: str | None = None


class VariantGroupSchema(CamelModel):
    name: str
    value: str
    options: list[VariantOptionSchema] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class OrderItemRequest(CamelModel):
    product_id: str | None = None
    product_name: str | None = None
    price: float | None = None  # Informational; the catalogue price is charged
    quantity: int
    selected_variants: list[VariantSelectionSchema] = Field(default_factory=list)
    image: str | None = None


class PaymentInfoRequest(CamelModel):
    card_number: str | None = None
    expiry_date: str | None = None
    cvv: str | None = None


class PlaceOrderRequest(CamelModel):
    items: list[OrderItemRequest] = Field(default_factory=list)
    customer_info: CustomerInfoSchema
    payment_info: PaymentInfoRequest

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {
                            "productId": "prod-001",
                            "productName": "Converse Chuck Taylor All Star II Hi",
                            "price": 75.0,
                            "quantity": 1,
                            "selectedVariants": [{"name": "color", "value": "Black"}],
                        }
                    ],
                    "customerInfo": {
                        "fullName": "Jane Doe",
                        "email": "jane@example.com",
                        "phone": "+15551234567",
                        "address": "1 Main St",
                        "city": "Springfield",
                        "state": "IL",
                        "zipCode": "62701",
                    },
                    "paymentInfo": {"cardNumber": "4111111111111111", "expiryDate": "12/30", "cvv": "111"},
                }
            ]
        },
    }


# ---------------------------------------------------------------------------
# Order Response Schemas
# ---------------------------------------------------------------------------
class OrderSummary(CamelModel):
    order_number: str
    status: str
    transaction_id: str | None = None
    total: float
    error: str | None = None


class PlaceOrderResponse(CamelModel):
    success: bool = True
    data: OrderSummary


class LineItemResponse(CamelModel):
    product_id: str
    product_name: str
    price: float
    quantity: int
    selected_variants: list[VariantSelectionSchema]
    image: str | None = None
    subtotal: float


class PaymentInfoResponse(CamelModel):
    card_number: str
    expiry_date: str


class OrderResponse(CamelModel):
    order_number: str
    items: list[LineItemResponse]
    customer_info: CustomerInfoSchema
    payment_info: PaymentInfoResponse
    subtotal: float
    shipping: float
    tax: float
    total: float
    status: str
    transaction_id: str | None = None
    notes: str | None = None
    email_sent: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderEnvelope(CamelModel):
    success: bool = True
    message: str | None = None
    data: OrderResponse


class OrderListEnvelope(CamelModel):
    success: bool = True
    count: int
    data: list[OrderResponse]


# ---------------------------------------------------------------------------
# Email Schemas
# ---------------------------------------------------------------------------
class SendOrderEmailRequest(CamelModel):
    order_number: str | None = None


class EmailDispatchData(CamelModel):
    order_number: str
    email_type: str
    recipient: str | None = None
    simulated_only: bool | None = None


class EmailDispatchResponse(CamelModel):
    success: bool = True
    message: str
    data: EmailDispatchData


# ---------------------------------------------------------------------------
# Product Schemas
# ---------------------------------------------------------------------------
class CreateProductRequest(CamelModel):
    name: str
    description: str
    price: float
    image: str
    inventory: int | None = None
    is_active: bool | None = None
    variants: list[VariantGroupSchema] = Field(default_factory=list)


class UpdateInventoryRequest(CamelModel):
    product_id: str
    quantity: int


class ProductResponse(CamelModel):
    id: str
    name: str
    description: str
    price: float
    image: str
    inventory: int
    is_active: bool
    variants: list[VariantGroupSchema]
    created_at: datetime | None = None


class ProductEnvelope(CamelModel):
    success: bool = True
    message: str | None = None
    data: ProductResponse


class ProductListEnvelope(CamelModel):
    success: bool = True
    count: int
    data: list[ProductResponse]
