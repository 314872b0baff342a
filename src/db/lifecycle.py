"""
Lifecycle Coordinator
-------------------
Cascading delete: no course may outlive the camp it belongs to.

Each course deletion is its own commit and fires the course store's recompute hook.
There is no transaction around the cascade, so an interruption between the course
deletions and the camp deletion can leave the camp in place with fewer courses.
"""
import logging

# Get logger
logger = logging.getLogger(__name__)


class LifecycleCoordinator:
    def __init__(self, course_store):
        self.course_store = course_store

    def on_camp_remove(self, camp_id) -> int:
        """Delete every course referencing camp_id. Called before the camp itself is erased."""
        logger.info(f"Cascading delete of courses for camp {camp_id}")
        removed = self.course_store.remove_many(camp_id)
        logger.info(f"Removed {removed} courses of camp {camp_id}")
        return removed
