"""
Read-only queries consumed by the audit and purchase order diagnostics
"""
import logging
from typing import List, Optional
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from xero_audit.exceptions import DataAccessError, NoActiveConnectionError
from xero_audit.models.schemas import LineItem, Bill, XeroConnection
from .db import Database
from .models import (
    XeroConnectionModel, InvoiceLineItemModel, InvoiceModel, ProfileModel
)

logger = logging.getLogger(__name__)


class AuditRepository:
    """
    Wraps the datastore reads. SQLAlchemy failures and rows that do not fit
    the schemas surface as DataAccessError.
    """

    def __init__(self, db: Database):
        self.db = db

    def get_active_connection(self) -> XeroConnection:
        try:
            with self.db.get_session() as session:
                connection = session.query(XeroConnectionModel).filter(
                    XeroConnectionModel.is_active.is_(True)
                ).one_or_none()

                if connection is None:
                    raise NoActiveConnectionError()

                return XeroConnection.model_validate(connection)
        except (SQLAlchemyError, ValidationError) as e:
            logger.error(f"Failed to load active Xero connection: {e}")
            raise DataAccessError(f"Failed to load active Xero connection: {e}") from e

    def get_active_account_id(self) -> str:
        return self.get_active_connection().user_id

    def fetch_line_items(self, account_id: str) -> List[LineItem]:
        """All line items for the account, newest first"""
        try:
            with self.db.get_session() as session:
                rows = session.query(InvoiceLineItemModel).filter(
                    InvoiceLineItemModel.user_id == account_id
                ).order_by(InvoiceLineItemModel.created_at.desc()).all()

                return [
                    LineItem(
                        id=row.id,
                        invoice_id=row.invoice_id,
                        external_line_item_id=row.xero_line_item_id,
                        created_at=row.created_at
                    )
                    for row in rows
                ]
        except (SQLAlchemyError, ValidationError) as e:
            logger.error(f"Failed to load line items for {account_id}: {e}")
            raise DataAccessError(f"Failed to load line items for {account_id}: {e}") from e

    def fetch_bills(self, account_id: str) -> List[Bill]:
        try:
            with self.db.get_session() as session:
                rows = session.query(InvoiceModel).filter(
                    InvoiceModel.user_id == account_id,
                    InvoiceModel.type == "ACCPAY"
                ).all()
                return [Bill.model_validate(row) for row in rows]
        except (SQLAlchemyError, ValidationError) as e:
            logger.error(f"Failed to load bills for {account_id}: {e}")
            raise DataAccessError(f"Failed to load bills for {account_id}: {e}") from e

    def get_profile(self, user_id: str) -> Optional[ProfileModel]:
        try:
            with self.db.get_session() as session:
                profile = session.query(ProfileModel).filter(
                    ProfileModel.id == user_id
                ).first()
                if profile is not None:
                    session.expunge(profile)
                return profile
        except SQLAlchemyError as e:
            logger.error(f"Failed to load profile {user_id}: {e}")
            raise DataAccessError(f"Failed to load profile {user_id}: {e}") from e
