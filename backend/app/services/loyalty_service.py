"""Boukak loyalty card service."""

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.customer import Customer
from app.models.integration_mapping import IntegrationProvider, MappableType
from app.models.shared import OrderStatus
from app.repositories.customer_repository import CustomerRepository
from app.repositories.integration_mapping_repository import MappingKey
from app.repositories.order_repository import OrderRepository
from app.services.identity_mapper import ExternalIdentityMapper
from app.services.integrations.boukak import BoukakClient

logger = logging.getLogger(__name__)

CARD_EVENTS = ("CARD_INSTALLED", "CARD_UNINSTALLED")


class LoyaltyRequestError(ValueError):
    """A loyalty request that cannot be fulfilled; ``payload`` is returned to the caller."""

    def __init__(self, payload: dict[str, Any]):
        super().__init__(payload.get("error"))
        self.payload = payload


@dataclass
class BulkSyncSummary:
    total: int = 0
    created: int = 0
    existing: int = 0
    failed: int = 0
    results: list[dict[str, Any]] = field(default_factory=list)


def customer_card_key(customer: Customer) -> MappingKey:
    return MappingKey(
        provider=IntegrationProvider.BOUKAK.value,
        mappable_type=MappableType.CUSTOMER.value,
        local_id=int(customer.id),  # type: ignore[arg-type]
        location_id=int(customer.location_id or 0),  # type: ignore[arg-type]
    )


def build_card_request(
    customer: Customer,
    template_id: str,
    platform: str,
    language: str,
    initial_cashback: float = 0,
) -> dict[str, Any]:
    return {
        "templateId": template_id,
        "platform": platform,
        "language": language,
        "customerData": {
            "firstname": customer.first_name,
            "lastname": customer.last_name,
            "phone": customer.mobile,
            "email": customer.email,
            "dob": customer.dob,
            "gender": customer.sex,
            "initialCashback": initial_cashback,
        },
    }


class LoyaltyService:
    def __init__(self, db: Session, boukak: BoukakClient):
        self.db = db
        self.boukak = boukak
        self.mapper = ExternalIdentityMapper(db)
        self.customer_repo = CustomerRepository(db)
        self.order_repo = OrderRepository(db)

    def create_card(
        self,
        customer_id: int,
        template_id: str | None = None,
        platform: str = "android",
        language: str = "en",
        initial_cashback: float = 0,
    ) -> dict[str, Any]:
        """Create a Boukak card for an active customer, at most once per location.

        Raises:
            LookupError: The customer does not exist or is inactive.
            LoyaltyRequestError: Boukak refused or returned no ids.
        """
        customer = self.customer_repo.get_active_by_id(customer_id)
        if customer is None:
            raise LookupError(f"Customer with ID {customer_id} not found or inactive")

        card_request = build_card_request(
            customer,
            template_id or settings.BOUKAK_DEFAULT_TEMPLATE_ID,
            platform,
            language,
            initial_cashback,
        )
        result = self.mapper.resolve_or_create(
            customer_card_key(customer), lambda: self.boukak.create_or_fetch(card_request)
        )
        if not result.success:
            logger.warning(
                "Boukak card creation failed for customer %s: %s", customer_id, result.error
            )
            raise LoyaltyRequestError(
                {"error": "Failed to create Boukak customer card", "message": result.error}
            )

        boukak_customer_id = (result.external_data or {}).get("customer_id")
        if result.details.get("status") == "existing":
            return {
                "message": "Customer already has a Boukak card",
                "customerId": customer.id,
                "boukakCustomerId": boukak_customer_id,
                "boukakCardId": result.external_id,
                "status": "existing",
            }

        logger.info("Created Boukak card %s for customer %s", result.external_id, customer.id)
        return {
            "message": "Boukak customer card created successfully",
            "customerId": customer.id,
            "boukakCustomerId": boukak_customer_id,
            "boukakCardId": result.external_id,
            "applePassUrl": result.details.get("applePassUrl"),
            "passWalletUrl": result.details.get("passWalletUrl"),
            "status": "created",
        }

    def add_stamps(self, order_id: int, stamps: int = 1) -> dict[str, Any]:
        """Add stamps for a completed order to its customer's card.

        Raises:
            LookupError: The order does not exist.
            LoyaltyRequestError: The order cannot earn stamps or Boukak failed.
        """
        order = self.order_repo.get_by_id(order_id)
        if order is None:
            raise LookupError(f"Order with ID {order_id} not found")

        customer = (
            self.customer_repo.get_by_id(order.customer_id)  # type: ignore[arg-type]
            if order.customer_id is not None
            else None
        )
        if customer is None:
            raise LoyaltyRequestError({"error": "Order does not have an associated customer"})

        if order.status_id != OrderStatus.COMPLETED:
            raise LoyaltyRequestError(
                {
                    "error": "Can only add stamps to completed orders",
                    "currentStatus": order.status_id,
                }
            )

        mapping = self.mapper.get(
            MappingKey(
                provider=IntegrationProvider.BOUKAK.value,
                mappable_type=MappableType.CUSTOMER.value,
                local_id=int(customer.id),  # type: ignore[arg-type]
                location_id=int(order.location_id),  # type: ignore[arg-type]
            )
        )
        if mapping is None:
            logger.warning(
                "Customer %s has no Boukak card at location %s", customer.id, order.location_id
            )
            raise LoyaltyRequestError(
                {
                    "error": "Customer does not have a Boukak loyalty card",
                    "customerId": customer.id,
                }
            )

        checkout = self.order_repo.get_checkout(order_id)
        products = None
        if checkout is not None:
            products = {"name": f"Order #{order.id}", "price": checkout.grand_total or 0}

        card_id = str(mapping.external_id)
        result = self.boukak.add_stamps(card_id, stamps, products)
        if not result.success:
            raise LoyaltyRequestError(
                {"error": "Failed to add stamps to Boukak card", "message": result.error}
            )

        logger.info("Added %s stamps to card %s for order %s", stamps, card_id, order.id)
        return {
            "message": "Stamps added successfully",
            "orderId": order.id,
            "customerId": customer.id,
            "boukakCardId": card_id,
            "stampsAdded": stamps,
            "activeStamps": result.details.get("activeStamps", 0),
            "rewards": result.details.get("rewards", 0),
        }

    def handle_webhook(self, event: str, card_id: str | None) -> None:
        """Record a card lifecycle event reported by Boukak."""
        if event not in CARD_EVENTS:
            logger.warning("Unknown Boukak webhook event: %s", event)
            return
        if not card_id:
            logger.warning("%s event missing cardId", event)
            return

        mapping = self.mapper.repo.get_by_external_id(
            IntegrationProvider.BOUKAK.value, MappableType.CUSTOMER.value, card_id
        )
        if mapping is None:
            logger.warning("No customer mapping found for Boukak card %s", card_id)
            return
        logger.info("Boukak %s for customer %s card %s", event, mapping.local_id, card_id)

    def sync_first_customers(self, limit: int | None = None) -> BulkSyncSummary:
        """Create cards for the first *limit* active customers using the bulk defaults."""
        customers = self.customer_repo.get_first_active(limit or settings.BOUKAK_BULK_LIMIT)
        summary = BulkSyncSummary(total=len(customers))

        for customer in customers:
            card_request = build_card_request(
                customer,
                settings.BOUKAK_BULK_TEMPLATE_ID,
                settings.BOUKAK_BULK_PLATFORM,
                settings.BOUKAK_BULK_LANGUAGE,
            )
            result = self.mapper.resolve_or_create(
                customer_card_key(customer),
                partial(self.boukak.create_or_fetch, card_request),
            )
            entry: dict[str, Any] = {
                "customerId": customer.id,
                "customerName": customer.full_name,
            }
            if not result.success:
                summary.failed += 1
                entry.update(status="failed", error=result.error or "Unknown error")
                logger.warning("Bulk sync failed for customer %s: %s", customer.id, result.error)
            elif result.details.get("status") == "existing":
                summary.existing += 1
                entry.update(status="existing", boukakCardId=result.external_id)
            else:
                summary.created += 1
                entry.update(status="created", boukakCardId=result.external_id)
            summary.results.append(entry)

        logger.info(
            "Boukak bulk sync finished: created=%s existing=%s failed=%s",
            summary.created,
            summary.existing,
            summary.failed,
        )
        return summary
