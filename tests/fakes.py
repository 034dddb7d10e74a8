"""In-memory repositories and unit of work for service tests."""

from __future__ import annotations

from types import SimpleNamespace

from sqlalchemy.exc import SQLAlchemyError


def equipment(id: int, *, stock: int = 2, name: str | None = None, **prices) -> SimpleNamespace:
    return SimpleNamespace(
        id=id,
        name=name or f"Item {id}",
        description="",
        image_url="",
        price_1_to_3_days=prices.get("p1", 100),
        price_4_to_7_days=prices.get("p2", 80),
        price_8_plus_days=prices.get("p3", 60),
        deposit=prices.get("deposit", 50),
        stock=stock,
        sort_order=0,
        categories=["general"],
    )


class FakeEquipmentRepository:
    def __init__(self, rows=()):
        self.rows = {int(r.id): r for r in rows}
        self.locked: list[int] = []

    async def list_all(self):
        return sorted(self.rows.values(), key=lambda e: (e.sort_order, e.id))

    async def get(self, equipment_id):
        return self.rows.get(int(equipment_id))

    async def lock_many(self, equipment_ids):
        ids = sorted({int(i) for i in equipment_ids})
        self.locked.extend(ids)
        return {i: self.rows[i] for i in ids if i in self.rows}


class FakeReservationRepository:
    def __init__(self):
        self.reservations = []
        self._next_item_id = 1

    def _number_items(self, reservation, items):
        for item in items:
            item.id = self._next_item_id
            item.reservation_id = reservation.id
            self._next_item_id += 1

    async def add(self, reservation):
        reservation.id = len(self.reservations) + 1
        self._number_items(reservation, reservation.items)
        self.reservations.append(reservation)
        return reservation

    async def replace_items(self, reservation, items):
        reservation.items = list(items)
        self._number_items(reservation, reservation.items)
        return list(reservation.items)

    async def get(self, reservation_id):
        return next((r for r in self.reservations if r.id == reservation_id), None)

    async def list_all(self):
        return list(reversed(self.reservations))

    async def list_order_numbers(self):
        return [r.order_number for r in self.reservations]

    async def list_items_for_equipment(self, equipment_id, *, exclude_statuses=()):
        return [
            item
            for r in self.reservations
            if r.status not in exclude_statuses
            for item in r.items
            if item.equipment_id == equipment_id
        ]

    async def flush(self):
        return None


class FakeUnitOfWork:
    def __init__(self, equipments=None, reservations=None):
        self.equipments = equipments or FakeEquipmentRepository()
        self.reservations = reservations or FakeReservationRepository()
        self.committed = 0
        self.rolled_back = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type:
            self.rolled_back += 1
        else:
            self.committed += 1
        return False

    async def commit(self):
        self.committed += 1

    async def rollback(self):
        self.rolled_back += 1


class BrokenReservationRepository(FakeReservationRepository):
    async def list_order_numbers(self):
        raise SQLAlchemyError("connection refused")


class UnreachableReservationRepository(FakeReservationRepository):
    async def list_order_numbers(self):
        raise ConnectionRefusedError(111, "Connect call failed")
