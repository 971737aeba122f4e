"""Push the POS catalog of a location into VOM.

Units, suppliers and categories are matched against VOM by name and created
when missing; the resulting VOM ids are upserted into ``integration_mappings``
so later syncs (products, bills) can resolve them.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.bill import Bill
from app.models.integration_mapping import IntegrationProvider, MappableType
from app.repositories.catalog_repository import CatalogRepository
from app.repositories.integration_mapping_repository import MappingKey
from app.repositories.item_repository import ItemRepository
from app.services.identity_mapper import ExternalIdentityMapper
from app.services.integrations.base import IntegrationSyncResult
from app.services.integrations.vom import VomCatalogGateway, VomClient, match_by_name

logger = logging.getLogger(__name__)

NAME_TAKEN_MARKER = "name has already been taken"


class VomSyncError(Exception):
    """Nothing to sync locally, or VOM could not be read."""


@dataclass
class VomSyncReport:
    entity: str
    location_id: int
    results: list[dict[str, Any]] = field(default_factory=list)
    details: dict[str, Any] = field(default_factory=dict)

    def add(
        self,
        local_id: int,
        name: str | None,
        status: str,
        vom_id: str | None = None,
        error: str | None = None,
    ) -> None:
        self.results.append(
            {"localId": local_id, "name": name, "status": status, "vomId": vom_id, "error": error}
        )

    def count(self, status: str) -> int:
        return sum(1 for entry in self.results if entry["status"] == status)

    def as_response(self) -> dict[str, Any]:
        return {
            "message": f"{self.entity.capitalize()} sync completed",
            "locationId": self.location_id,
            "total": len(self.results),
            "created": self.count("created"),
            "matched": self.count("matched"),
            "alreadyMapped": self.count("already_mapped"),
            "failed": self.count("failed"),
            "results": self.results,
            "details": self.details or None,
        }


def _vom_key(mappable_type: MappableType, local_id: int, location_id: int) -> MappingKey:
    return MappingKey(
        provider=IntegrationProvider.VOM.value,
        mappable_type=mappable_type.value,
        local_id=local_id,
        location_id=location_id,
    )


def _fmt_date(value: date | None, default: date) -> str:
    return (value or default).strftime("%Y-%m-%d")


class VomSyncService:
    def __init__(self, db: Session, vom: VomClient):
        self.db = db
        self.vom = vom
        self.mapper = ExternalIdentityMapper(db)
        self.catalog_repo = CatalogRepository(db)
        self.item_repo = ItemRepository(db)

    def _mapped_vom_id(
        self, mappable_type: MappableType, local_id: Any, location_id: int
    ) -> str | None:
        if not local_id:
            return None
        mapping = self.mapper.get(_vom_key(mappable_type, int(local_id), location_id))
        return str(mapping.external_id) if mapping is not None else None

    def _record(
        self,
        report: VomSyncReport,
        mappable_type: MappableType,
        local_id: Any,
        name: Any,
        result: IntegrationSyncResult,
    ) -> None:
        if not result.success or not result.external_id:
            logger.error(
                "VOM %s sync failed for %s (%s): %s", report.entity, local_id, name, result.error
            )
            report.add(local_id, name, "failed", error=result.error or "Unknown error")
            return
        self.mapper.upsert(
            _vom_key(mappable_type, int(local_id), report.location_id),
            result.external_id,
            result.external_data,
        )
        status = result.details.get("status", "created")
        report.add(int(local_id), name, status, vom_id=result.external_id)

    def sync_units(self, location_id: int) -> dict[str, Any]:
        units = self.catalog_repo.get_active_units()
        if not units:
            raise VomSyncError("No active units found")
        vom_units = self.vom.list_units()
        if vom_units is None:
            raise VomSyncError("Failed to fetch units from VOM")

        lookup = match_by_name(vom_units, "name_en", "name_ar", "name")
        gateway = VomCatalogGateway(
            find=lambda payload: lookup(payload["name_en"]), create=self.vom.create_unit
        )
        report = VomSyncReport("units", location_id)
        for unit in units:
            payload = {
                "name_en": unit.name,
                "name_ar": unit.name,
                "symbol": unit.name,
                "unit_type_id": 4,
            }
            result = gateway.create_or_fetch(payload)
            self._record(report, MappableType.UNIT, unit.id, unit.name, result)
        return report.as_response()

    def sync_suppliers(self, user_id: int, location_id: int) -> dict[str, Any]:
        suppliers = self.catalog_repo.get_active_suppliers(user_id)
        if not suppliers:
            raise VomSyncError("No active suppliers found")
        vom_suppliers = self.vom.list_suppliers()
        if vom_suppliers is None:
            raise VomSyncError("Failed to fetch suppliers from VOM")

        lookup = match_by_name(vom_suppliers, "name", "company_name")
        gateway = VomCatalogGateway(
            find=lambda payload: lookup(payload["name"]), create=self.vom.create_supplier
        )
        report = VomSyncReport("suppliers", location_id)
        for supplier in suppliers:
            payload = {
                "name": supplier.name,
                "country_code": "SA",
                "account_receivable_id": settings.VOM_ACCOUNT_RECEIVABLE_ID,
                "opening_balance": 0,
                "email": supplier.email,
                "phone": supplier.phone,
                "website": supplier.website,
                "address": supplier.address,
                "company_name": supplier.company_name,
                "contact_person": supplier.contact_person,
                "type": supplier.type,
                "notes": supplier.remarks,
            }
            result = gateway.create_or_fetch(payload)
            self._record(report, MappableType.SUPPLIER, supplier.id, supplier.name, result)
        return report.as_response()

    def sync_categories(self, location_id: int) -> dict[str, Any]:
        categories = self.catalog_repo.get_active_categories(location_id)
        if not categories:
            raise VomSyncError(f"No active categories found for location {location_id}")
        vom_categories = self.vom.list_categories()
        if vom_categories is None:
            raise VomSyncError("Failed to fetch categories from VOM")

        lookup = match_by_name(vom_categories, "name_en", "name_ar", "name")
        gateway = VomCatalogGateway(
            find=lambda payload: lookup(payload["name_en"]), create=self.vom.create_category
        )
        report = VomSyncReport("categories", location_id)
        for category in categories:
            payload = {
                "name_en": category.name,
                "name_ar": category.name,
                "description": category.description,
                "image": category.image,
                "sort_order": category.display_order or 0,
                "is_active": True,
            }
            result = gateway.create_or_fetch(payload)
            self._record(report, MappableType.CATEGORY, category.id, category.name, result)
        return report.as_response()

    def _find_product(
        self, vom_products: list[dict[str, Any]], barcode: str | None, name: str | None
    ) -> dict[str, Any] | None:
        if barcode:
            wanted = barcode.strip().lower()
            for record in vom_products:
                value = record.get("barcode")
                if isinstance(value, str) and value.strip().lower() == wanted:
                    return record
        return match_by_name(vom_products, "name_en")(name)

    def _search_product(self, name: str | None) -> dict[str, Any] | None:
        if not name:
            return None
        candidates = self.vom.search_products(name) or []
        return match_by_name(candidates, "name_en", "name_ar", "name")(name)

    def sync_products(self, location_id: int) -> dict[str, Any]:
        items = self.item_repo.get_active_for_location(location_id)
        if not items:
            raise VomSyncError(f"No active products found for location {location_id}")
        vom_products = self.vom.list_products() or []

        report = VomSyncReport("products", location_id)
        missing_categories = 0
        missing_units = 0
        for item, category_id in items:
            item_id = int(item.id)  # type: ignore[arg-type]
            mapped = self._mapped_vom_id(MappableType.PRODUCT, item_id, location_id)
            if mapped is not None:
                report.add(item_id, item.name, "already_mapped", vom_id=mapped)
                continue

            match = self._find_product(
                vom_products, item.barcode, item.name  # type: ignore[arg-type]
            )
            if match is not None and match.get("id") is not None:
                result = IntegrationSyncResult(
                    success=True,
                    external_id=str(match["id"]),
                    external_data=match,
                    details={"status": "matched"},
                )
                self._record(report, MappableType.PRODUCT, item_id, item.name, result)
                continue

            vom_category_id = self._mapped_vom_id(MappableType.CATEGORY, category_id, location_id)
            if vom_category_id is None:
                missing_categories += 1
                logger.warning(
                    "No VOM category mapping for category %s at location %s",
                    category_id,
                    location_id,
                )
            vom_unit_id = self._mapped_vom_id(MappableType.UNIT, item.unit_id, location_id)
            if vom_unit_id is None and item.unit_id:
                missing_units += 1
                logger.warning(
                    "No VOM unit mapping for unit %s at location %s", item.unit_id, location_id
                )

            name = item.name or "Unknown Product"
            payload = {
                "name_en": name,
                "name_ar": name,
                "category_id": vom_category_id or str(settings.VOM_DEFAULT_CATEGORY_ID),
                "unit_id": vom_unit_id or str(settings.VOM_DEFAULT_UNIT_ID),
                "type": "product",
            }
            result = self.vom.create_product(payload)
            if not result.success and NAME_TAKEN_MARKER in str(result.details.get("response", "")):
                existing = self._search_product(item.name)  # type: ignore[arg-type]
                if existing is not None and existing.get("id") is not None:
                    logger.info("VOM product %s already exists as %s", item.name, existing["id"])
                    result = IntegrationSyncResult(
                        success=True,
                        external_id=str(existing["id"]),
                        external_data=existing,
                        details={"status": "matched"},
                    )
            elif result.success:
                result.details.setdefault("status", "created")
            self._record(report, MappableType.PRODUCT, item_id, item.name, result)

        report.details = {
            "missingCategoryMappings": missing_categories,
            "missingUnitMappings": missing_units,
        }
        return report.as_response()

    def _bill_items(self, bill: Bill, location_id: int) -> tuple[list[dict[str, Any]], int]:
        items: list[dict[str, Any]] = []
        missing = 0
        for detail in bill.details:
            if not detail.item_id:
                continue
            product_id = self._mapped_vom_id(MappableType.PRODUCT, detail.item_id, location_id)
            if product_id is None:
                missing += 1
                logger.warning(
                    "No VOM product mapping for item %s in bill %s", detail.item_id, bill.bill_no
                )
                continue
            items.append(
                {
                    "product_id": product_id,
                    "quantity": detail.quantity or 1,
                    "unit_price": detail.cost or 0,
                    "total": detail.total or 0,
                    "notes": detail.remarks,
                }
            )
        return items, missing

    def build_bill_payload(
        self, bill: Bill, supplier_id: str, items: list[dict[str, Any]], today: date | None = None
    ) -> dict[str, Any]:
        today = today or date.today()
        bill_no = bill.bill_no or f"BILL-{bill.id}"
        return {
            "bill_no": bill_no,
            "code": bill_no,
            "date": _fmt_date(bill.date, today),  # type: ignore[arg-type]
            "due_date": _fmt_date(
                bill.due_date, today + timedelta(days=30)  # type: ignore[arg-type]
            ),
            "payment_date": _fmt_date(bill.date, today),  # type: ignore[arg-type]
            "notes": bill.remarks or "",
            "supplier": supplier_id,
            "supplier_id": supplier_id,
            "warehouse_id": settings.VOM_DEFAULT_WAREHOUSE_ID,
            "items": items,
            "products": items,
            "subtotal": bill.sub_total or 0,
            "discount": bill.discount or 0,
            "tax": bill.tax or 0,
            "total": bill.total or 0,
            "remaining": bill.total or 0,
            "payment_term": 1,
            "action": "save",
        }

    def sync_bills(self, location_id: int) -> dict[str, Any]:
        bills = self.catalog_repo.get_syncable_bills(location_id)
        if not bills:
            raise VomSyncError(f"No bills found for location {location_id}")
        vom_bills = self.vom.list_purchase_bills()
        if vom_bills is None:
            raise VomSyncError("Failed to fetch purchase bills from VOM")
        lookup = match_by_name(vom_bills, "bill_no", "code")

        report = VomSyncReport("bills", location_id)
        missing_suppliers = 0
        missing_products = 0
        for bill in bills:
            bill_id = int(bill.id)  # type: ignore[arg-type]
            mapped = self._mapped_vom_id(MappableType.BILL, bill_id, location_id)
            if mapped is not None:
                report.add(bill_id, bill.bill_no, "already_mapped", vom_id=mapped)
                continue

            match = lookup(bill.bill_no)  # type: ignore[arg-type]
            if match is not None and match.get("id") is not None:
                result = IntegrationSyncResult(
                    success=True,
                    external_id=str(match["id"]),
                    external_data=match,
                    details={"status": "matched"},
                )
                self._record(report, MappableType.BILL, bill_id, bill.bill_no, result)
                continue

            supplier_id = self._mapped_vom_id(MappableType.SUPPLIER, bill.supplier_id, location_id)
            if supplier_id is None:
                missing_suppliers += 1
                report.add(
                    bill_id,
                    bill.bill_no,  # type: ignore[arg-type]
                    "failed",
                    error="Missing supplier mapping - sync suppliers first",
                )
                continue

            items, missing = self._bill_items(bill, location_id)
            missing_products += missing
            if not items:
                report.add(
                    bill_id,
                    bill.bill_no,  # type: ignore[arg-type]
                    "failed",
                    error="Missing product mappings for all items - sync products first",
                )
                continue

            payload = self.build_bill_payload(bill, supplier_id, items)
            result = self.vom.create_purchase_bill(payload)
            if result.success:
                result.details.setdefault("status", "created")
            self._record(report, MappableType.BILL, bill_id, bill.bill_no, result)

        report.details = {
            "missingSupplierMappings": missing_suppliers,
            "missingProductMappings": missing_products,
        }
        return report.as_response()
