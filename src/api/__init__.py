"""
API Module
---------
Provides RESTful API endpoints for the camp directory using FastAPI.
Features include:
- Camp CRUD with geocoded locations
- Browsing camps by career focus
- Course CRUD scoped to a camp
"""
