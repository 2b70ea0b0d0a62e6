"""Constants for the bundled adapters."""

import aiohttp

DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=30)

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
NOMINATIM_REVERSE_ENDPOINT = "/reverse"
NOMINATIM_ZOOM_STREET = 17
DEFAULT_USER_AGENT = "pyparkingzones"
DEFAULT_LANGUAGE = "pl"

# Nominatim address keys that name a thoroughfare, most common first.
THOROUGHFARE_KEYS = ("road", "pedestrian", "street")

REMOTE_CITIES_ENDPOINT = "/cities"

CATALOG_PACKAGE = "pyparkingzones.data"
CATALOG_FILENAME = "zones.json"
CATALOG_SCHEMA_FILENAME = "zones.schema.json"
