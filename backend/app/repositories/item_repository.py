from sqlalchemy.orm import Session

from app.models.category import Category, SubCategory
from app.models.item import Item, UniqueItemMap
from app.models.shared import ACTIVE_STATUS


class ItemRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_names(self, item_ids: list[int]) -> dict[int, str | None]:
        if not item_ids:
            return {}
        rows = self.db.query(Item.id, Item.name).filter(Item.id.in_(item_ids)).all()
        return {row[0]: row[1] for row in rows}

    def get_active_for_location(self, location_id: int) -> list[tuple[Item, int]]:
        """Active items whose category belongs to *location_id*, with the category id."""
        rows = (
            self.db.query(Item, SubCategory.category_id)
            .join(SubCategory, Item.sub_category_id == SubCategory.id)
            .join(Category, SubCategory.category_id == Category.id)
            .filter(Item.status_id == ACTIVE_STATUS, Category.location_id == location_id)
            .order_by(Item.id)
            .all()
        )
        return [(row[0], row[1]) for row in rows]

    def get_unique_ids(self, item_ids: list[int], location_id: int) -> dict[int, int]:
        """Map item id to the cross-location unique item id at *location_id*."""
        if not item_ids:
            return {}
        rows = (
            self.db.query(UniqueItemMap.item_id, UniqueItemMap.unique_item_id)
            .filter(
                UniqueItemMap.item_id.in_(item_ids),
                UniqueItemMap.location_id == location_id,
            )
            .all()
        )
        return {row[0]: row[1] for row in rows}

    def get_unique_products(self, location_ids: list[int]) -> list[tuple[UniqueItemMap, Item]]:
        """One entry per unique item id across *location_ids*, newest unique id first."""
        if not location_ids:
            return []
        rows = (
            self.db.query(UniqueItemMap, Item)
            .join(Item, UniqueItemMap.item_id == Item.id)
            .filter(UniqueItemMap.location_id.in_(location_ids))
            .order_by(UniqueItemMap.unique_item_id.desc(), UniqueItemMap.id)
            .all()
        )
        seen: set[int] = set()
        products: list[tuple[UniqueItemMap, Item]] = []
        for mapping, item in rows:
            if mapping.unique_item_id in seen:
                continue
            seen.add(mapping.unique_item_id)  # type: ignore[arg-type]
            products.append((mapping, item))
        return products
