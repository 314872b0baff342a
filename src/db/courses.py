"""
Course Store
-----------
CRUD operations for courses plus the aggregate hook that keeps a camp's averageCost
in line with the tuition of the courses that reference it.
"""
import math
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.db.database import CampDB, CourseDB
from src.errors import IntegrityDrift, NotFound
from src.models import parse_payload, reject_nulls
from src.models.course import CourseCreate, CourseUpdate

# Get logger
logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {
    "title": "Please add a course title",
    "description": "Please add a description",
    "duration": "Please specify a duration for the course",
    "tuition": "Please add a tuition cost",
    "difficulty": "Please specify difficulty level",
}


def round_average_cost(mean: float) -> int:
    """Round up to the next multiple of 10, never down."""
    return int(math.ceil(mean / 10) * 10)


class CourseStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, course_id) -> CourseDB:
        course = self.db.query(CourseDB).filter(CourseDB.id == course_id).first()
        if not course:
            raise NotFound("Course", course_id)
        return course

    def list(self, camp_id=None) -> List[CourseDB]:
        query = self.db.query(CourseDB)
        if camp_id is not None:
            query = query.filter(CourseDB.camp_id == camp_id)
        return query.order_by(CourseDB.created_at).all()

    def create(self, camp_id, data) -> CourseDB:
        if not self.db.query(CampDB.id).filter(CampDB.id == camp_id).first():
            raise NotFound("Camp", camp_id)

        payload = parse_payload(CourseCreate, data)
        course = CourseDB(camp_id=camp_id, **payload.model_dump())
        self.db.add(course)
        self._commit("insert")
        self.db.refresh(course)
        logger.info(f"Inserted course: {course.title} (ID: {course.id}, camp: {camp_id})")

        self.recompute_average_cost(camp_id)
        return course

    def update(self, course_id, data) -> CourseDB:
        course = self.get(course_id)
        changes = parse_payload(CourseUpdate, data).model_dump(exclude_unset=True)
        reject_nulls(changes, REQUIRED_FIELDS)

        for key, value in changes.items():
            setattr(course, key, value)
        self._commit("update")
        self.db.refresh(course)
        logger.info(f"Updated course: {course.title} (ID: {course.id})")

        self.recompute_average_cost(course.camp_id)
        return course

    def remove(self, course_id):
        course = self.get(course_id)
        self._remove(course)

    def remove_many(self, camp_id) -> int:
        courses = self.list(camp_id)
        for course in courses:
            self._remove(course)
        return len(courses)

    def _remove(self, course: CourseDB):
        course_id, camp_id = course.id, course.camp_id
        # Runs before the delete commits, so the leaving course is excluded explicitly
        self.recompute_average_cost(camp_id, exclude_course_id=course_id)
        self.db.delete(course)
        self._commit("delete")
        logger.info(f"Deleted course {course_id} (camp: {camp_id})")

    def recompute_average_cost(self, camp_id, exclude_course_id=None) -> Optional[int]:
        """
        Recompute and store the averageCost of a camp from its current courses.

        Only the average_cost column is written, the camp's save hook does not run.
        When no course is left the stored value is kept as it is. A missing camp,
        a database error or a non-finite mean is logged and swallowed so the
        triggering course operation always goes through. Returns the stored value,
        or None when nothing was written.
        """
        try:
            query = self.db.query(func.avg(CourseDB.tuition)).filter(CourseDB.camp_id == camp_id)
            if exclude_course_id is not None:
                query = query.filter(CourseDB.id != exclude_course_id)
            mean = query.scalar()

            if mean is None:
                logger.info(f"No courses left for camp {camp_id}, averageCost left unchanged")
                return None

            average_cost = round_average_cost(float(mean))
            updated = self.db.query(CampDB).filter(CampDB.id == camp_id).update(
                {CampDB.average_cost: average_cost}
            )
            if not updated:
                raise IntegrityDrift(camp_id)

            self.db.commit()
            logger.info(f"averageCost of camp {camp_id} set to {average_cost}")
            return average_cost

        except IntegrityDrift as e:
            self.db.rollback()
            logger.warning(f"Skipping averageCost recompute: {e.message}")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error while recomputing averageCost of camp {camp_id}: {str(e)}")
        except (ArithmeticError, ValueError) as e:
            self.db.rollback()
            logger.error(f"Could not compute averageCost of camp {camp_id}: {str(e)}")
        return None

    def _commit(self, operation):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database {operation} failed for course: {str(e)}")
            raise
