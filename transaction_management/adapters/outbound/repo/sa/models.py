from typing import Optional

from sqlalchemy import VARCHAR
from sqlalchemy.orm import Mapped, mapped_column

from transaction_management.adapters.outbound.repo.sa.base import Base, TablenameMixin


class Customer(Base, TablenameMixin):
    customer_id: Mapped[str] = mapped_column(VARCHAR(16), primary_key=True)
    company_name: Mapped[str] = mapped_column(VARCHAR(64))
    country: Mapped[Optional[str]] = mapped_column(VARCHAR(32), nullable=True, index=True)
