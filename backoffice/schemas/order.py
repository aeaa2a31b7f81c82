# backoffice/schemas/order.py
import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from backoffice.db.models.order import OrderStatus
from backoffice.schemas.validators import (
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_PRODUCT_LENGTH,
    MAX_PRODUCTS,
    MAX_PRODUCTS_TEXT_LENGTH,
    check_required,
    sanitize_name,
    sanitize_phone,
)


# --- Entrada: formulários do site e agente de pedidos (camelCase) ---
class OrderCreate(BaseModel):
    customer_name: str = Field(alias="customerName")
    customer_phone: str = Field(alias="customerPhone")
    products: List[str]

    @model_validator(mode="before")
    @classmethod
    def campos_obrigatorios(cls, data: Any) -> Any:
        check_required(data, ("customerName", "customerPhone", "products"), "Missing required fields")
        return data

    @field_validator("customer_name", mode="before")
    @classmethod
    def validar_nome(cls, v):
        return sanitize_name(v)

    @field_validator("customer_phone", mode="before")
    @classmethod
    def validar_telefone(cls, v):
        return sanitize_phone(v)

    @field_validator("products", mode="before")
    @classmethod
    def validar_produtos(cls, v):
        if not isinstance(v, list):
            raise ValueError("Products must be an array")
        if len(v) == 0:
            raise ValueError("Products array cannot be empty")
        if len(v) > MAX_PRODUCTS:
            raise ValueError(f"Too many products (max {MAX_PRODUCTS})")
        for product in v:
            if not isinstance(product, str) or not product.strip():
                raise ValueError("Each product must be a non-empty string")
        return [product.strip()[:MAX_PRODUCT_LENGTH] for product in v]


# --- Entrada: integração legada /pedidos (snake_case) ---
class PedidoCreate(BaseModel):
    customer_name: str
    customer_phone: str
    products: List[str]

    @model_validator(mode="before")
    @classmethod
    def campos_obrigatorios(cls, data: Any) -> Any:
        check_required(
            data,
            ("customer_name", "customer_phone", "products"),
            "Missing required fields: customer_name, customer_phone, products",
        )
        return data

    @field_validator("customer_name", mode="before")
    @classmethod
    def validar_nome(cls, v):
        if not isinstance(v, str) or not v.strip() or len(v) > MAX_NAME_LENGTH:
            raise ValueError(
                f"Invalid customer_name: must be a non-empty string with max {MAX_NAME_LENGTH} characters"
            )
        return v.strip()

    @field_validator("customer_phone", mode="before")
    @classmethod
    def validar_telefone(cls, v):
        if not isinstance(v, str) or not v.strip() or len(v) > MAX_PHONE_LENGTH:
            raise ValueError(
                f"Invalid customer_phone: must be a non-empty string with max {MAX_PHONE_LENGTH} characters"
            )
        return v.strip()

    @field_validator("products", mode="before")
    @classmethod
    def validar_produtos(cls, v):
        # Aceita texto livre (uma linha ditada ao agente) ou uma lista
        if isinstance(v, str):
            return [v.strip()[:MAX_PRODUCTS_TEXT_LENGTH]]
        if isinstance(v, list):
            return [str(product).strip()[:MAX_PRODUCT_LENGTH] for product in v]
        raise ValueError("Invalid products: must be an array or string")


class OrderStatusUpdate(BaseModel):
    status: OrderStatus

    @model_validator(mode="before")
    @classmethod
    def status_obrigatorio(cls, data: Any) -> Any:
        check_required(data, ("status",), "Status is required")
        return data

    @field_validator("status", mode="before")
    @classmethod
    def status_valido(cls, v):
        if v not in [s.value for s in OrderStatus]:
            raise ValueError("Invalid status value")
        return v


# --- Saída ---
class OrderSchema(BaseModel):
    id: uuid.UUID
    customer_name: str
    customer_phone: str
    products: List[str]
    status: OrderStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrderList(BaseModel):
    orders: List[OrderSchema]


class OrderDetail(BaseModel):
    order: OrderSchema


class OrderWriteResponse(BaseModel):
    success: bool = True
    order: OrderSchema
    message: Optional[str] = None


class OrderCreatedResponse(BaseModel):
    success: bool = True
    orderId: uuid.UUID
    message: str


class DeleteResponse(BaseModel):
    success: bool = True
    message: str


class PedidoCreatedResponse(BaseModel):
    success: bool = True
    order: OrderSchema
