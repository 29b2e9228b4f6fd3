"""Internal constants shared across the library."""

DEFAULT_PROVIDER_HOST = "webservices.nextbus.com"
FEED_PATH = "/service/publicXMLFeed"
USER_AGENT = "busfeed/1.0"

# ------------------------------------------------------------------
# Flat-earth geometry
# ------------------------------------------------------------------

EARTH_CIRCUMFERENCE_M = 40_075_160
MILES_PER_METER = 0.000621371
SECTOR_COUNT = 8

# ------------------------------------------------------------------
# Display text
# ------------------------------------------------------------------

NO_VEHICLES_TEXT = "(no vehicles)"
INITIAL_DISPLAY_TEXT = "(error)"
