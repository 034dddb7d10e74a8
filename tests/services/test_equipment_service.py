from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy.exc import SQLAlchemyError

from rental.core.exceptions import InfrastructureError, NotFoundError
from rental.services.equipment import EquipmentService
from tests.fakes import FakeEquipmentRepository, FakeUnitOfWork, equipment

pytestmark = pytest.mark.unit


async def test_list_returns_dtos_in_catalog_order():
    rows = [equipment(2, name="Stove"), equipment(1, name="Tent")]
    rows[0].sort_order = 1
    service = EquipmentService(lambda: FakeUnitOfWork(FakeEquipmentRepository(rows)))

    result = await service.list()

    assert [e.name for e in result] == ["Tent", "Stove"]


async def test_quote_unknown_equipment_is_not_found():
    service = EquipmentService(lambda: FakeUnitOfWork(FakeEquipmentRepository([])))
    with pytest.raises(NotFoundError):
        await service.quote(5, date(2025, 6, 1), date(2025, 6, 2), 1)


async def test_availability_for_unknown_equipment_is_zero():
    service = EquipmentService(lambda: FakeUnitOfWork(FakeEquipmentRepository([])))
    result = await service.availability(5, date(2025, 6, 1), date(2025, 6, 2))
    assert result.available is False
    assert result.available_quantity == 0


class FailingEquipmentRepository(FakeEquipmentRepository):
    async def list_all(self):
        raise SQLAlchemyError("db error")


async def test_list_raises_infrastructure_error_on_failure():
    service = EquipmentService(lambda: FakeUnitOfWork(FailingEquipmentRepository()))
    with pytest.raises(InfrastructureError):
        await service.list()
