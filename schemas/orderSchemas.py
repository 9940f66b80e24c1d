from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderItemSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId")
    name: str
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)
    total: float = Field(ge=0)

    @field_validator("product_id", mode="before")
    @classmethod
    def stringify_product_id(cls, value):
        # cart ids are numeric on the client
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class CreateOrderSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: List[OrderItemSchema] = Field(min_length=1)
    delivery_date: str = Field(alias="deliveryDate")
    address: Optional[str] = None
