"""
API Module
---------
Provides RESTful API endpoints for the camp directory using FastAPI.
Features include:
- Creating, updating and deleting camps (with address geocoding)
- Browsing camps by career focus
- Managing the courses of a camp (with averageCost upkeep)
"""
from fastapi import FastAPI, Depends, Body, Header, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
import logging
from typing import Optional, Dict, Any

from src.config import API_PREFIX, DEFAULT_PAGE_SIZE, LOG_LEVEL
from src.db.database import get_db
from src.db.camps import CampStore
from src.db.courses import CourseStore
from src.errors import CampDirectoryError, ValidationFailure
from src.geocoding.nominatim import NominatimGeocoder
from src.models.camp import Career, CampOut, CampDetailOut
from src.models.course import CourseOut

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Camp Directory API",
    description="Directory of coding bootcamps and the courses they offer",
    version="1.0.0"
)


@app.exception_handler(CampDirectoryError)
async def camp_directory_error_handler(request: Request, exc: CampDirectoryError):
    logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    messages = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()]
    logger.warning(f"Validation error on {request.url.path}: {messages}")
    failure = ValidationFailure(messages)
    return JSONResponse(status_code=failure.http_status, content=failure.to_response())


def get_geocoder():
    return NominatimGeocoder()


def get_course_store(db: Session = Depends(get_db)) -> CourseStore:
    return CourseStore(db)


def get_camp_store(db: Session = Depends(get_db), geocoder=Depends(get_geocoder)) -> CampStore:
    return CampStore(db, geocoder)


def camp_to_dict(camp, with_courses=False):
    schema = CampDetailOut if with_courses else CampOut
    data = schema.model_validate(camp).model_dump(mode="json", by_alias=True)
    # averageCost is absent until the first course is added
    if data.get("averageCost") is None:
        data.pop("averageCost", None)
    return data


def course_to_dict(course):
    return CourseOut.model_validate(course).model_dump(mode="json", by_alias=True)


@app.get("/")
def read_root():
    return {"message": "Welcome to the Camp Directory API"}


@app.get(f"{API_PREFIX}/careers")
def get_careers():
    """Return the closed list of career tracks camps can be filed under"""
    return {"success": True, "data": [career.value for career in Career]}


@app.post(f"{API_PREFIX}/camps", status_code=201)
def create_camp(
    payload: Dict[str, Any] = Body(...),
    user_id: str = Header(..., alias="X-User-Id"),
    store: CampStore = Depends(get_camp_store)
):
    camp = store.create(payload, user_id)
    return {"success": True, "data": camp_to_dict(camp)}


@app.get(f"{API_PREFIX}/camps")
def get_camps(
    career: Optional[str] = None,
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=0),
    offset: int = Query(0, ge=0),
    store: CampStore = Depends(get_camp_store)
):
    total, camps = store.list(career=career, limit=limit, offset=offset)
    return {
        "success": True,
        "count": len(camps),
        "total": total,
        "data": [camp_to_dict(camp) for camp in camps]
    }


@app.get(f"{API_PREFIX}/camps/{{camp_id}}")
def get_camp(camp_id: str, store: CampStore = Depends(get_camp_store)):
    camp = store.get(camp_id)
    return {"success": True, "data": camp_to_dict(camp, with_courses=True)}


@app.put(f"{API_PREFIX}/camps/{{camp_id}}")
def update_camp(
    camp_id: str,
    payload: Dict[str, Any] = Body(...),
    store: CampStore = Depends(get_camp_store)
):
    camp = store.update(camp_id, payload)
    return {"success": True, "data": camp_to_dict(camp)}


@app.delete(f"{API_PREFIX}/camps/{{camp_id}}")
def delete_camp(camp_id: str, store: CampStore = Depends(get_camp_store)):
    store.remove(camp_id)
    return {"success": True}


@app.get(f"{API_PREFIX}/camps/{{camp_id}}/courses")
def get_camp_courses(camp_id: str, store: CourseStore = Depends(get_course_store)):
    courses = store.list(camp_id)
    return {"success": True, "count": len(courses), "data": [course_to_dict(c) for c in courses]}


@app.post(f"{API_PREFIX}/camps/{{camp_id}}/courses", status_code=201)
def create_course(
    camp_id: str,
    payload: Dict[str, Any] = Body(...),
    store: CourseStore = Depends(get_course_store)
):
    course = store.create(camp_id, payload)
    return {"success": True, "data": course_to_dict(course)}


@app.get(f"{API_PREFIX}/courses/{{course_id}}")
def get_course(course_id: str, store: CourseStore = Depends(get_course_store)):
    return {"success": True, "data": course_to_dict(store.get(course_id))}


@app.put(f"{API_PREFIX}/courses/{{course_id}}")
def update_course(
    course_id: str,
    payload: Dict[str, Any] = Body(...),
    store: CourseStore = Depends(get_course_store)
):
    course = store.update(course_id, payload)
    return {"success": True, "data": course_to_dict(course)}


@app.delete(f"{API_PREFIX}/courses/{{course_id}}")
def delete_course(course_id: str, store: CourseStore = Depends(get_course_store)):
    store.remove(course_id)
    return {"success": True}
