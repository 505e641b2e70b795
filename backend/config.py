"""
Happy Food Backend Configuration
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Base paths
BASE_DIR = Path(__file__).parent
DATA_DIR = BASE_DIR / "data"
FOOD_MOOD_PATH = DATA_DIR / "food_mood.json"

APP_NAME = "Happy Food"
APP_VERSION = "1.0.0"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# USDA FoodData Central Configuration
DEMO_API_KEY = "DEMO_KEY"
USDA_API_KEY = os.getenv("USDA_API_KEY", "") or DEMO_API_KEY
USDA_BASE_URL = "https://api.nal.usda.gov/fdc/v1"
USDA_USER_AGENT = f"Happy-Food-Server/{APP_VERSION}"
USDA_TIMEOUT = 10.0

if USDA_API_KEY == DEMO_API_KEY:
    logger.warning(
        "Using demo API key. Set USDA_API_KEY environment variable for production."
    )

# Outbound rate limit (sliding window)
RATE_LIMIT_WINDOW = 60.0
RATE_LIMIT_MAX_REQUESTS = 10

# Match Settings
SEARCH_PAGE_SIZE = 5
MIN_MATCH_CONFIDENCE = 15
MAX_MATCHES = 3
MAX_KEY_NUTRIENTS = 10

# CORS - Frontend URLs
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    os.getenv("FRONTEND_URL", ""),  # Production frontend URL
]
# Filter empty strings
CORS_ORIGINS = [origin for origin in CORS_ORIGINS if origin]

# Words in a food name that hint it is a real food category
FOOD_CATEGORY_WORDS = [
    "food", "fruit", "vegetable", "meat", "dairy",
    "grain", "nut", "seed", "spice", "herb"
]
