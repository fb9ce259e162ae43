from flask_cors import CORS
from flask_limiter import Limiter
from .services.request_utils import get_client_ip


cors = CORS()
limiter = Limiter(
    key_func=get_client_ip,
    default_limits=[],  # No default limits, only explicit per-endpoint
    storage_uri="memory://",  # In-memory storage by default
)
