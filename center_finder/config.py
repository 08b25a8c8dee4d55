# center_finder/config.py
import json
import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

CONFIG_PATH = Path(__file__).parent.parent / "config" / "settings.json"


@dataclass
class Settings:
    nominatim_base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "CenterFinder/1.0"
    request_delay: float = 1.0  # Nominatim usage policy: max 1 request per second
    request_timeout: float = 10.0
    reverse_zoom: int = 14

    def __post_init__(self):
        config = {}
        if CONFIG_PATH.exists():
            with open(CONFIG_PATH) as f:
                config = json.load(f)

        nominatim_config = config.get("nominatim", {})
        self.nominatim_base_url = nominatim_config.get("base_url", self.nominatim_base_url)
        self.user_agent = nominatim_config.get("user_agent", self.user_agent)
        self.reverse_zoom = nominatim_config.get("reverse_zoom", self.reverse_zoom)

        geocoding_config = config.get("geocoding", {})
        self.request_delay = geocoding_config.get("request_delay", self.request_delay)
        self.request_timeout = geocoding_config.get("request_timeout", self.request_timeout)

        # Environment overrides the config file
        self.nominatim_base_url = os.getenv("NOMINATIM_BASE_URL", self.nominatim_base_url).rstrip("/")
        self.user_agent = os.getenv("NOMINATIM_USER_AGENT", self.user_agent)
        self.request_delay = float(os.getenv("CENTER_FINDER_REQUEST_DELAY", self.request_delay))
        self.request_timeout = float(os.getenv("CENTER_FINDER_TIMEOUT", self.request_timeout))


settings = Settings()
