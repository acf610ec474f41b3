from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

# module storefront.notifications.schemas
class LeadCartItem(BaseModel):
    title: str
    quantity: int = Field(ge=1)
    price: Optional[float] = None


class LeadRequest(BaseModel):
    """Demande de notification: commande (Order) ou prospect entreprise (B2B)."""
    type: Literal["Order", "B2B"]
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    comment: Optional[str] = None
    address: Optional[str] = None
    deliveryTime: Optional[str] = None
    cart: List[LeadCartItem] = Field(default_factory=list)

    @field_validator("name", "phone", "email", "comment", "address", "deliveryTime", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None
