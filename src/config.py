"""
Configuration Module
------------------
Reads runtime settings from environment variables.
Every value has a default so the service starts locally without any setup.
"""
import os

# Database
DATABASE_URL = os.getenv("DB_URL", "sqlite:///./camps.db")

# Geocoding (OpenStreetMap Nominatim forward search)
NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/search")
GEOCODER_USER_AGENT = os.getenv("GEOCODER_USER_AGENT", "CampDirectoryApp/1.0")
GEOCODER_TIMEOUT = float(os.getenv("GEOCODER_TIMEOUT", "10"))

# API
API_PREFIX = os.getenv("API_PREFIX", "/api/v1")
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "25"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
