import logging
from typing import Any

from arq import cron

from app.core.database import SessionLocal
from app.services.integrations.boukak import BoukakClient
from app.services.loyalty_service import LoyaltyService
from app.tasks import redis_settings

logger = logging.getLogger(__name__)


async def sync_loyalty_cards_task(ctx: dict[str, Any], limit: int | None = None) -> dict[str, int]:
    """Background task: create Boukak cards for active customers that have none.

    Runs daily and on demand from the bulk-sync endpoint.
    """
    db = SessionLocal()
    try:
        summary = LoyaltyService(db, BoukakClient()).sync_first_customers(limit)
        if summary.created or summary.failed:
            logger.info(
                "Loyalty card sync: %d created, %d existing, %d failed",
                summary.created,
                summary.existing,
                summary.failed,
            )
        return {
            "total": summary.total,
            "created": summary.created,
            "existing": summary.existing,
            "failed": summary.failed,
        }
    finally:
        db.close()


class WorkerSettings:
    functions = [sync_loyalty_cards_task]
    cron_jobs = [
        cron(sync_loyalty_cards_task, hour=2, minute=0),  # daily at 02:00
    ]
    redis_settings = redis_settings
