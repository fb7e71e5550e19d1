"""Store settings and bulk data administration (seed / clear)."""

import logging
from typing import Dict

from sqlalchemy.orm import Session

from cafe_pos.models.attendance import Attendance
from cafe_pos.models.material import RawMaterial
from cafe_pos.models.product import Product, RecipeItem
from cafe_pos.models.sale import Sale, SaleItem
from cafe_pos.models.stock import StockMovement
from cafe_pos.models.store_settings import StoreSettings
from cafe_pos.models.user import User
from cafe_pos.models.waste import Waste
from cafe_pos.schemas.settings import DataInitRequest, StoreSettingsUpdate
from cafe_pos.services.product_service import ProductService
from cafe_pos.services.stock_ledger import StockLedger
from cafe_pos.services.user_service import UserService

logger = logging.getLogger(__name__)

# Child tables first.
LEDGER_TABLES = (SaleItem, Sale, Waste, Attendance, StockMovement)
CATALOG_TABLES = (RecipeItem, Product, RawMaterial, User)


class DataAdminService:

    def __init__(self, db: Session):
        self.db = db

    def _settings_row(self) -> StoreSettings:
        row = self.db.query(StoreSettings).order_by(StoreSettings.id).first()
        if row is None:
            row = StoreSettings()
            self.db.add(row)
            self.db.flush()
        return row

    def get_settings(self) -> StoreSettings:
        """Return the settings row, creating it with defaults on first use."""
        row = self.db.query(StoreSettings).order_by(StoreSettings.id).first()
        if row is None:
            row = StoreSettings()
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        return row

    def update_settings(self, updates: StoreSettingsUpdate, commit: bool = True) -> StoreSettings:
        row = self._settings_row()
        for field, value in updates.model_dump(exclude_unset=True).items():
            if value is None and field != "printer_name":
                continue
            setattr(row, field, value)
        if commit:
            self.db.commit()
            self.db.refresh(row)
        else:
            self.db.flush()
        logger.info("Store settings updated")
        return row

    def _delete_all(self, models) -> Dict[str, int]:
        counts = {}
        for model in models:
            counts[model.__tablename__] = self.db.query(model).delete(synchronize_session=False)
        return counts

    def clear_data(self) -> Dict[str, int]:
        """Delete sales, waste, attendance and stock movements. Catalog is kept."""
        try:
            counts = self._delete_all(LEDGER_TABLES)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.expire_all()
        logger.warning(f"Cleared ledger data: {counts}")
        return counts

    def initialize(self, seed: DataInitRequest) -> Dict[str, int]:
        """Replace the catalog and users with ``seed`` and clear every ledger.

        The wipe and every insert share one transaction, so a bad seed
        leaves the existing store untouched.
        """
        try:
            self._delete_all(LEDGER_TABLES + CATALOG_TABLES)
            self.db.expire_all()

            ledger = StockLedger(self.db)
            for material in seed.materials:
                ledger.create_material(material, commit=False)
            products = ProductService(self.db)
            for product in seed.products:
                products.create_product(product, commit=False)
            users = UserService(self.db)
            for user in seed.users:
                users.create_user(user, commit=False)
            if seed.settings is not None:
                self.update_settings(seed.settings, commit=False)

            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Store initialization rolled back, existing data kept: {e}")
            raise

        counts = {
            "materials": len(seed.materials),
            "products": len(seed.products),
            "users": len(seed.users),
        }
        logger.info(f"Initialized store data: {counts}")
        return counts
