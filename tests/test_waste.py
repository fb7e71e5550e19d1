"""Tests for posting waste."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from cafe_pos.core.exceptions import NotFoundError, ValidationError
from cafe_pos.models.stock import StockMovement
from cafe_pos.models.waste import Waste
from cafe_pos.schemas.waste import WasteCreate
from cafe_pos.services.stock_ledger import StockLedger
from cafe_pos.services.waste_service import WasteService, most_wasted


def _waste(material_id="mat-milk", quantity="5", reason="Spilled", **fields):
    return WasteCreate(
        material_id=material_id,
        quantity=Decimal(quantity),
        reason=reason,
        reported_by="Mona",
        reported_by_id="user-1",
        **fields,
    )


class TestPostWaste:

    def test_records_loss_and_deducts(self, db_session, coffee_materials):
        record = WasteService(db_session).post_waste(_waste(quantity="5"))

        assert record.id.startswith("waste-")
        assert record.material_name == "Milk"
        assert record.unit == "ml"
        assert record.total_loss == Decimal("20")
        assert StockLedger(db_session).get_material("mat-milk").current_stock == Decimal("45")

        movement = db_session.query(StockMovement).one()
        assert movement.reason == "waste"
        assert movement.ref_id == record.id

    def test_waste_of_entire_stock_allowed(self, db_session, coffee_materials):
        WasteService(db_session).post_waste(_waste(quantity="50"))
        assert StockLedger(db_session).get_material("mat-milk").current_stock == Decimal("0")

    def test_waste_exceeding_stock_rejected(self, db_session, coffee_materials):
        with pytest.raises(ValidationError):
            WasteService(db_session).post_waste(_waste(quantity="51"))
        assert db_session.query(Waste).count() == 0

    def test_empty_reason_rejected(self, db_session, coffee_materials):
        with pytest.raises(ValidationError):
            WasteService(db_session).post_waste(_waste(reason="   "))

    def test_non_positive_quantity_rejected(self, db_session, coffee_materials):
        data = WasteCreate.model_construct(
            id=None, material_id="mat-milk", quantity=Decimal("0"), reason="Spilled",
            reported_by="Mona", reported_by_id="user-1", timestamp=None,
        )
        with pytest.raises(ValidationError):
            WasteService(db_session).post_waste(data)

    def test_unknown_material(self, db_session):
        with pytest.raises(NotFoundError):
            WasteService(db_session).post_waste(_waste(material_id="mat-none"))

    def test_list_by_date(self, db_session, coffee_materials):
        service = WasteService(db_session)
        service.post_waste(_waste(quantity="1", timestamp=datetime(2024, 3, 1, 9, tzinfo=timezone.utc)))
        service.post_waste(_waste(quantity="1", timestamp=datetime(2024, 3, 2, 9, tzinfo=timezone.utc)))

        assert len(service.list_waste()) == 2
        assert [w.date for w in service.list_waste(date="2024-03-02")] == ["2024-03-02"]


class TestMostWasted:

    def test_ranks_by_total_loss(self, db_session, coffee_materials):
        service = WasteService(db_session)
        service.post_waste(_waste(material_id="mat-beans", quantity="2"))  # loss 6
        service.post_waste(_waste(material_id="mat-milk", quantity="1"))   # loss 4
        service.post_waste(_waste(material_id="mat-milk", quantity="2"))   # loss 8

        ranking = most_wasted(service.list_waste())
        assert [r.material_id for r in ranking] == ["mat-milk", "mat-beans"]
        assert ranking[0].total_loss == Decimal("12")
        assert ranking[0].total_quantity == Decimal("3")
        assert ranking[0].count == 2

    def test_limit(self, db_session, coffee_materials):
        service = WasteService(db_session)
        service.post_waste(_waste(material_id="mat-beans", quantity="1"))
        service.post_waste(_waste(material_id="mat-milk", quantity="1"))
        assert len(most_wasted(service.list_waste(), limit=1)) == 1
