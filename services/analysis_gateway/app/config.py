# Central config for the analysis gateway
import os

from dotenv import load_dotenv

load_dotenv()

# Upstream model (Gemini generateContent)
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_API_URL = os.getenv(
    "GEMINI_API_URL",
    f"https://generativelanguage.googleapis.com/v1beta/models/{GEMINI_MODEL}:generateContent",
)
API_KEY_ENV = "GEMINI_API_KEY"

# Platform default for the single outbound call; no per-request override
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", "15.0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Reserved introspection path (the empty path is treated the same way)
HEALTH_PATH = "health"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class ConfigurationError(RuntimeError):
    """The gateway cannot serve analysis requests as configured."""


def get_api_key() -> str:
    # Read per request; never cached
    key = os.getenv(API_KEY_ENV, "").strip()
    if not key:
        raise ConfigurationError(f"{API_KEY_ENV} not configured")
    return key
