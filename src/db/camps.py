"""
Camp Store
---------
CRUD operations for camps. Every create or update goes through before_save, which
regenerates the slug and resolves the address into a location before anything is
written. Removal cascades to the camp's courses through the LifecycleCoordinator.
"""
import logging
from typing import List, Optional, Tuple

from slugify import slugify
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.db.courses import CourseStore
from src.db.database import CampDB
from src.db.lifecycle import LifecycleCoordinator
from src.errors import NotFound, UniquenessConflict, ValidationFailure
from src.geocoding.nominatim import resolve_location
from src.models import parse_payload, reject_nulls
from src.models.camp import CampCreate, CampUpdate

# Get logger
logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    "name": "Please add a name",
    "description": "Please add a description",
    "email": "Please add an email address",
    "careers": "Please select at least one relevant career",
}


class CampStore:
    def __init__(self, db: Session, geocoder, course_store: Optional[CourseStore] = None,
                 coordinator: Optional[LifecycleCoordinator] = None):
        self.db = db
        self.geocoder = geocoder
        self.course_store = course_store or CourseStore(db)
        self.coordinator = coordinator or LifecycleCoordinator(self.course_store)

    def before_save(self, draft, address_supplied=True):
        """
        Pre-persist enrichment. Returns a new draft with the slug regenerated and,
        when an address was supplied, the location resolved and the address dropped.
        Raises UpstreamFailure before anything is written if geocoding fails.
        """
        enriched = dict(draft)
        enriched["slug"] = slugify(enriched["name"].lower())

        address = enriched.pop("address", None)
        if address_supplied:
            location = resolve_location(address, self.geocoder).to_document()
            coordinates = location.get("coordinates") or [None, None]
            enriched["location"] = location
            enriched["longitude"], enriched["latitude"] = coordinates

        return enriched

    def get(self, camp_id) -> CampDB:
        camp = self.db.query(CampDB).filter(CampDB.id == camp_id).first()
        if not camp:
            raise NotFound("Camp", camp_id)
        return camp

    def list(self, career=None, limit=None, offset=0) -> Tuple[int, List[CampDB]]:
        """Browse camps, optionally by career focus. Returns (total, page)."""
        camps = self.db.query(CampDB).order_by(CampDB.created_at).all()
        if career:
            camps = [camp for camp in camps if career in (camp.careers or [])]

        total = len(camps)
        end = offset + limit if limit is not None else None
        return total, camps[offset:end]

    def create(self, data, user_id) -> CampDB:
        payload = parse_payload(CampCreate, data)
        if not user_id:
            raise ValidationFailure(["user: Please add an owning user"])

        draft = payload.model_dump()
        draft["user"] = user_id
        self._ensure_unique_name(draft["name"])

        camp = CampDB(**self.before_save(draft, address_supplied=True))
        self.db.add(camp)
        self._commit("insert")
        self.db.refresh(camp)
        logger.info(f"Inserted: {camp.name} (ID: {camp.id})")
        return camp

    def update(self, camp_id, data) -> CampDB:
        camp = self.get(camp_id)
        changes = parse_payload(CampUpdate, data).model_dump(exclude_unset=True)
        reject_nulls(changes, REQUIRED_FIELDS)

        if "name" in changes and changes["name"] != camp.name:
            self._ensure_unique_name(changes["name"], exclude_id=camp.id)

        draft = {"name": camp.name}
        draft.update(changes)
        enriched = self.before_save(draft, address_supplied="address" in changes)

        for key, value in enriched.items():
            setattr(camp, key, value)
        self._commit("update")
        self.db.refresh(camp)
        logger.info(f"Updated: {camp.name} (ID: {camp.id})")
        return camp

    def remove(self, camp_id):
        camp = self.get(camp_id)
        self.coordinator.on_camp_remove(camp.id)

        self.db.delete(camp)
        self._commit("delete")
        logger.info(f"Deleted camp {camp_id}")

    def _ensure_unique_name(self, name, exclude_id=None):
        query = self.db.query(CampDB.id).filter(CampDB.name == name)
        if exclude_id is not None:
            query = query.filter(CampDB.id != exclude_id)
        if query.first():
            raise UniquenessConflict("name")

    def _commit(self, operation):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if operation == "delete":
                logger.error(f"Database delete failed for camp: {str(e)}")
                raise
            # name is the only unique column besides the primary key
            logger.warning(f"Unique constraint violated on camp {operation}: {str(e.orig)}")
            raise UniquenessConflict("name") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database {operation} failed for camp: {str(e)}")
            raise
