"""Inventory store persisting applied identities with SQLAlchemy."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select

from kprune.domain.model import ObjectIdentity

from .mappings import inventory_object_table, inventory_table
from .unit_of_work import session_factory

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from sqlalchemy.orm import Session

    from kprune.domain.model import Inventory
    from kprune.domain.ports import InventoryStore

log = getLogger(__name__)


class SqlAlchemyInventoryStore:
    """Keeps one row per recorded identity, grouped by inventory.

    ``replace`` swaps the whole identity set inside a single transaction, so a
    reader sees either the old or the new set, never a mix.
    """

    def __init__(self, session_factory_: Callable[[], Session] | None = None) -> None:
        self._session_factory = session_factory_ or session_factory()

    def load(self, inventory: Inventory) -> list[ObjectIdentity]:
        with self._session_factory() as session:
            inventory_pk = self._find_inventory(session, inventory)
            if inventory_pk is None:
                return []
            stmt = select(
                inventory_object_table.c.group,
                inventory_object_table.c.kind,
                inventory_object_table.c.namespace,
                inventory_object_table.c.name,
            ).where(inventory_object_table.c.inventory_pk == inventory_pk)
            identities = [
                ObjectIdentity.of(group=group, kind=kind, namespace=namespace, name=name)
                for group, kind, namespace, name in session.execute(stmt).all()
            ]
        return sorted(identities, key=str)

    def replace(self, inventory: Inventory, identities: Iterable[ObjectIdentity]) -> None:
        unique = sorted(set(identities), key=str)
        with self._session_factory() as session, session.begin():
            inventory_pk = self._find_inventory(session, inventory)
            now = datetime.now(tz=UTC)
            if inventory_pk is None:
                result = session.execute(
                    insert(inventory_table).values(
                        namespace=inventory.namespace,
                        name=inventory.name,
                        inventory_id=inventory.inventory_id,
                        updated_at=now,
                    )
                )
                inventory_pk = result.inserted_primary_key[0]
            else:
                session.execute(
                    inventory_table.update()
                    .where(inventory_table.c.id == inventory_pk)
                    .values(updated_at=now)
                )
                session.execute(
                    delete(inventory_object_table).where(
                        inventory_object_table.c.inventory_pk == inventory_pk
                    )
                )
            if unique:
                session.execute(
                    insert(inventory_object_table),
                    [
                        {
                            "inventory_pk": inventory_pk,
                            "group": identity.group_kind.group,
                            "kind": identity.group_kind.kind,
                            "namespace": identity.namespace,
                            "name": identity.name,
                        }
                        for identity in unique
                    ],
                )
        log.debug("replaced inventory %s with %d objects", inventory, len(unique))

    @staticmethod
    def _find_inventory(session: Session, inventory: Inventory) -> int | None:
        stmt = (
            select(inventory_table.c.id)
            .where(inventory_table.c.namespace == inventory.namespace)
            .where(inventory_table.c.name == inventory.name)
            .where(inventory_table.c.inventory_id == inventory.inventory_id)
        )
        return session.execute(stmt).scalar_one_or_none()


if TYPE_CHECKING:
    _store_check: InventoryStore = SqlAlchemyInventoryStore()
