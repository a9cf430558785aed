"""
SQLAlchemy ORM Models for the tables the audit reads
"""
from sqlalchemy import Column, String, Float, DateTime, Date, Boolean
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class XeroConnectionModel(Base):
    __tablename__ = "xero_connections"

    id = Column(String, primary_key=True)
    user_id = Column(String, index=True)
    tenant_id = Column(String)
    access_token = Column(String)
    is_active = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class InvoiceModel(Base):
    __tablename__ = "invoices"

    id = Column(String, primary_key=True)
    user_id = Column(String, index=True)
    xero_invoice_id = Column(String, index=True)
    type = Column(String)  # ACCPAY (bill) or ACCREC
    reference = Column(String, nullable=True)
    contact_name = Column(String, nullable=True)
    total = Column(Float, default=0.0)
    status = Column(String, nullable=True)
    invoice_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class InvoiceLineItemModel(Base):
    __tablename__ = "invoice_line_items"

    id = Column(String, primary_key=True)
    user_id = Column(String, index=True)
    invoice_id = Column(String, index=True)
    xero_line_item_id = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)


class ProfileModel(Base):
    __tablename__ = "profiles"

    id = Column(String, primary_key=True)
    email = Column(String)
    full_name = Column(String, nullable=True)
    role = Column(String, default="user")  # user, admin
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
