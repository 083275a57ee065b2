DEBUG_ENTITY_CLIENT = False

ENTITY_CLIENT = "http"  # http | memory
ENTITY_API_URL = "https://api.evrythng.com"
ENTITY_API_KEY = None
