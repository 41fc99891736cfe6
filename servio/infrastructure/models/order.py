"""SQLAlchemy models for orders, customers and outbound customer messages."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.sql import expression

from servio.infrastructure.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String(64), primary_key=True)
    restaurant_id = Column(String(64), nullable=False, index=True)
    external_id = Column(String(120), nullable=True)
    channel = Column(String(32), nullable=False)
    items = Column(Text, nullable=False, default="[]")
    customer_name = Column(String(120), nullable=True)
    customer_phone = Column(String(32), nullable=True)
    customer_email = Column(String(120), nullable=True)
    total_amount = Column(Float, nullable=False, default=0.0)
    status = Column(String(16), nullable=False, default="received")
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())


class CustomerModel(Base):
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True)
    restaurant_id = Column(String(64), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=True, index=True)
    phone = Column(String(32), nullable=True, index=True)
    opt_in_sms = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    opt_in_email = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    total_orders = Column(Integer, nullable=False, default=0)
    total_spent = Column(Float, nullable=False, default=0.0)
    last_order_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())


class MarketingSendModel(Base):
    """Log of every SMS/email sent (or attempted) to a customer."""

    __tablename__ = "marketing_sends"

    id = Column(String(36), primary_key=True)
    customer_id = Column(
        String(36), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(String(8), nullable=False)
    recipient = Column(String(120), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(16), nullable=False)
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["CustomerModel", "MarketingSendModel", "OrderModel"]
