import os
from typing import Optional, Tuple
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


DEFAULT_ELASTICSEARCH_URL = "http://localhost:9200"
DEFAULT_INDEX_NAME = "autocomplete"
DEFAULT_PORT = 8080


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read an environment variable, treating blank values as unset"""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


class Settings:
    """Application settings and configuration"""

    def __init__(self):
        self.elasticsearch_url = _env("ELASTICSEARCH_URL", DEFAULT_ELASTICSEARCH_URL)
        self.elasticsearch_username = os.getenv("ELASTICSEARCH_USERNAME")
        self.elasticsearch_password = os.getenv("ELASTICSEARCH_PASSWORD")
        self.elasticsearch_request_timeout = float(_env("ELASTICSEARCH_REQUEST_TIMEOUT", "10"))

        # Suggestion index
        self.index_name = _env("ELASTICSEARCH_INDEX", DEFAULT_INDEX_NAME)

        # Server settings
        self.host = _env("HOST", "0.0.0.0")
        self.port = int(_env("PORT", str(DEFAULT_PORT)))
        self.log_level = _env("LOG_LEVEL", "INFO").upper()

        # API settings
        self.api_title = "Keyword Autocomplete API"
        self.api_description = "Stores keywords and serves search-as-you-type suggestions backed by an Elasticsearch completion suggester"
        self.api_version = "1.0.0"

        # Suggest settings
        self.suggest_size = 10

    @property
    def elasticsearch_auth(self) -> Optional[Tuple[str, str]]:
        """Get Elasticsearch authentication tuple"""
        if self.elasticsearch_username and self.elasticsearch_password:
            return (self.elasticsearch_username, self.elasticsearch_password)
        return None
