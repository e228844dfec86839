import os
from dataclasses import dataclass

from dotenv import load_dotenv

SCRAPING_KEY_PLACEHOLDER = "your-scraping-api-key-here"
GENERATION_KEY_PLACEHOLDER = "your-openai-api-key-here"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    """
    Credentials and endpoints for the two remote collaborators.

    Missing API keys fall back to obvious placeholders; requests then fail
    downstream with an authorization error instead of failing at startup.
    """
    scraping_api_key: str = SCRAPING_KEY_PLACEHOLDER
    generation_api_key: str = GENERATION_KEY_PLACEHOLDER
    scraping_base_url: str = "https://app.scrapingbee.com/api/v1/"
    generation_base_url: str = "https://api.openai.com/v1"
    generation_model: str = "gpt-4"
    fetch_timeout: float = 30.0
    generation_timeout: float = 60.0
    marketplace_domain: str = "amazon.com"
    country_code: str = "us"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            scraping_api_key=os.getenv("SCRAPING_API_KEY") or SCRAPING_KEY_PLACEHOLDER,
            generation_api_key=os.getenv("GENERATION_API_KEY") or GENERATION_KEY_PLACEHOLDER,
            scraping_base_url=os.getenv("SCRAPING_BASE_URL", cls.scraping_base_url),
            generation_base_url=os.getenv("GENERATION_BASE_URL", cls.generation_base_url),
            generation_model=os.getenv("GENERATION_MODEL", cls.generation_model),
            fetch_timeout=_float_env("FETCH_TIMEOUT", cls.fetch_timeout),
            generation_timeout=_float_env("GENERATION_TIMEOUT", cls.generation_timeout),
            marketplace_domain=os.getenv("MARKETPLACE_DOMAIN", cls.marketplace_domain),
            country_code=os.getenv("COUNTRY_CODE", cls.country_code),
        )
