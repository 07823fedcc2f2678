"""Payload keys shared with the collector. Changing any of these breaks events downstream."""

# Standard pairs
USER_ID = "uid"
USERAGENT = "ua"
IP_ADDRESS = "ip"
TIMEZONE = "tz"
LANGUAGE = "lang"
RESOLUTION = "res"
VIEWPORT = "vp"
COLOR_DEPTH = "cd"
NETWORK_USER_ID = "tnuid"
DOMAIN_USER_ID = "duid"

# Geolocation context
GEO_LATITUDE = "geo_latitude"
GEO_LONGITUDE = "geo_longitude"
GEO_LAT_LONG_ACCURACY = "geo_latLong_accuracy"
GEO_ALTITUDE = "geo_altitude"
GEO_ALTITUDE_ACCURACY = "geo_altitude_accuracy"
GEO_BEARING = "geo_bearing"
GEO_SPEED = "geo_speed"
GEO_TIMESTAMP = "geo_timestamp"

# Platform context
PLATFORM_OS_TYPE = "osType"
PLATFORM_OS_VERSION = "osVersion"
PLATFORM_DEVICE_MANUFACTURER = "deviceManufacturer"
PLATFORM_DEVICE_MODEL = "deviceModel"
PLATFORM_PHYSICAL_MEMORY = "physicalMemory"
PLATFORM_AVAILABLE_STORAGE = "availableStorage"
PLATFORM_TOTAL_STORAGE = "totalStorage"
PLATFORM_LANGUAGE = "language"
