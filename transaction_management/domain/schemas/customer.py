from typing import Optional

from pydantic import BaseModel, Field


class CustomerPK(BaseModel):
    customer_id: str = Field(min_length=1, max_length=16)

    def __eq__(self, other):
        return isinstance(other, CustomerPK) and self.customer_id == other.customer_id

    def __hash__(self):
        return hash(self.customer_id)


class Customer(CustomerPK):
    company_name: str = Field(min_length=1, max_length=64)
    country: Optional[str] = Field(default=None, max_length=32)
