from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.subscriptionSchemas import PlanId


class CardSchema(BaseModel):
    number: str
    expiry: Optional[str] = None
    cvv: Optional[str] = None
    holder: Optional[str] = None


class ProcessPaymentSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: Optional[float] = Field(default=None, ge=0)
    plan_id: Optional[PlanId] = Field(default=None, alias="planId")
    payment_method: Literal["card", "bank", "wallet", "googlepay", "applepay"] = Field(
        default="card", alias="paymentMethod"
    )
    card: Optional[CardSchema] = None
