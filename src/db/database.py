"""
Database Module
-------------
Handles database connections, ORM models, and database operations.
Uses SQLAlchemy and defines the database schema for camps and their courses.
"""
from sqlalchemy import create_engine, Column, String, Float, Boolean, DateTime, Integer, Text, JSON, ForeignKey, Index
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from datetime import datetime
import uuid
import logging

from src.config import DATABASE_URL

# Get logger
logger = logging.getLogger(__name__)

Base = declarative_base()


def new_id():
    return uuid.uuid4().hex


# Define the Camp table structure
class CampDB(Base):
    __tablename__ = "camps"
    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False, unique=True)
    slug = Column(String, nullable=True)
    description = Column(Text, nullable=False)
    website = Column(String, nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String, nullable=False)
    # {"type": "Point", "coordinates": [lon, lat], ...} or {"formattedAddress": "Remote"}
    location = Column(JSON, nullable=True)
    # Mirrors location.coordinates, null for remote camps
    longitude = Column(Float, nullable=True)
    latitude = Column(Float, nullable=True)
    careers = Column(JSON, nullable=False, default=list)
    enrolled_users = Column(JSON, nullable=False, default=list)
    average_rating = Column(Float, nullable=True)
    average_cost = Column(Integer, nullable=True)
    image = Column(String, default="no-photo.jpg")
    job_assistance = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    user = Column(String, nullable=False)
    start_date = Column(DateTime, nullable=True)

    # Read-only view, course deletion goes through LifecycleCoordinator
    courses = relationship("CourseDB", viewonly=True, order_by="CourseDB.created_at")

    __table_args__ = (Index("ix_camps_coordinates", "longitude", "latitude"),)


# Define the Course table structure
class CourseDB(Base):
    __tablename__ = "courses"
    id = Column(String, primary_key=True, index=True, default=new_id)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    duration = Column(String, nullable=False)
    tuition = Column(Float, nullable=False)
    difficulty = Column(String, nullable=False)
    available_job = Column(Boolean, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    camp_id = Column(String, ForeignKey("camps.id"), nullable=False, index=True)


def build_engine(url=DATABASE_URL):
    connect_args = {}
    if url.startswith("sqlite"):
        # The API serves requests from a thread pool
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args)


engine = build_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def create_tables():
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created (if they didn't exist previously).")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")
        raise

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
