from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PlanId = Literal["1month", "3months", "1year"]


class CreateSubscriptionSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plan: PlanId
    payment_method: Optional[str] = Field(default=None, alias="paymentMethod")


class RenewSubscriptionSchema(BaseModel):
    plan: PlanId
