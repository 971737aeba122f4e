from sqlalchemy.orm import Session

from app.models.location import Location
from app.models.shared import ACTIVE_STATUS


class LocationRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, location_id: int) -> Location | None:
        return self.db.query(Location).filter(Location.id == location_id).first()

    def get_active_for_user(self, user_id: int) -> list[Location]:
        return (
            self.db.query(Location)
            .filter(Location.user_id == user_id, Location.status_id == ACTIVE_STATUS)
            .order_by(Location.id)
            .all()
        )

    def get_ids_for_user(self, user_id: int) -> list[int]:
        rows = self.db.query(Location.id).filter(Location.user_id == user_id).all()
        return [row[0] for row in rows]
