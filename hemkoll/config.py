"""Application settings and environment variables"""

import os
from dotenv import load_dotenv

load_dotenv()

# Hemnet sits behind a bot challenge, so pages go through a render proxy
RENDER_PROXY_URL = os.getenv("RENDER_PROXY_URL", "https://api.allorigins.win/raw?url={url}")
HEMNET_TIMEOUT = float(os.getenv("HEMNET_TIMEOUT", "8.0"))

# Booli is fetched directly
BOOLI_TIMEOUT = float(os.getenv("BOOLI_TIMEOUT", "10.0"))
USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)
ACCEPT_LANGUAGE = os.getenv("ACCEPT_LANGUAGE", "sv-SE,sv;q=0.9,en-US;q=0.8,en;q=0.7")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# API
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
