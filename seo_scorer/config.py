"""
Runtime configuration for the SEO Scorer, read from the environment (and a .env file if present).
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS origins, comma-separated; "*" allows any origin
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# Page fetching
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", 30.0)) # seconds
FETCH_USER_AGENT = os.getenv(
    "FETCH_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/108.0.0.0 Safari/537.36"
)
