# re-export common schemas for simpler imports
from .ClickRecord import ClickRecord
from .SlugConfig import SlugConfig
from .HealthResponse import HealthResponse
from .LandingQuery import LandingQuery

__all__ = [
    "ClickRecord",
    "SlugConfig",
    "HealthResponse",
    "LandingQuery",
]
