"""
Geocoding Module
--------------
Handles forward geocoding operations to convert postal addresses to structured locations.
Uses OpenStreetMap's Nominatim API and resolves empty addresses to the remote sentinel location.
"""
