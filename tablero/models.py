"""Modelos pydantic de los payloads de actualización (PATCH) por recurso."""

from pydantic import BaseModel, ConfigDict, Field


class UpdateRequest(BaseModel):
    """Base de los PATCH: siempre llevan id, el resto es opcional."""

    model_config = ConfigDict(extra="forbid")

    id: str | int


class CustomerUpdateRequest(UpdateRequest):
    name: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str | None = None
    document: str | None = None
    city: str | None = None


class OrderUpdateRequest(UpdateRequest):
    order_number: int | None = Field(default=None, ge=0)
    customer_name: str | None = None
    quantity: int | None = Field(default=None, ge=0)
    total: float | None = Field(default=None, ge=0)
    delivery_date: str | None = None
    is_delivered: bool | None = None
    order_status_id: str | None = None


class ProductUpdateRequest(UpdateRequest):
    name: str | None = Field(default=None, min_length=1)
    packs_per_batch: int | None = Field(default=None, ge=0)
    price: float | None = Field(default=None, ge=0)
    unit_weight: str | None = None
