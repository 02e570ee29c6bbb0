"""
Configuration settings for the G2 review scraper.

Centralized configuration for the API client, orchestrator and CLI.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DEBUG_DIR = Path(os.getenv("REVIEW_SCRAPER_DEBUG_DIR", "."))

# API Configuration
API_KEY_ENV_VAR = "RAPID_API_KEY"
G2_API_HOST = "g2-data-api.p.rapidapi.com"
G2_API_ENDPOINT = "g2-products"
G2_PRODUCT_URL_TEMPLATE = "https://www.g2.com/products/{product}/reviews"
PLATFORM = "G2"

# Products we collect reviews for (iteration order is this tuple's order)
VALID_PRODUCTS = (
    "bloxone-ddi",
    "infoblox-nios",
    "bloxone-threat-defense",
)

# Fetch behaviour
DEFAULT_MAX_REVIEWS = 1000
MAX_RETRIES = 3
REQUEST_TIMEOUT_SECONDS = 30
DEFAULT_RETRY_AFTER_SECONDS = 2
RETRY_DEADLINE_SECONDS = 120  # None disables the overall deadline
COURTESY_DELAY_SECONDS = 2

# Output
DEFAULT_OUTPUT_FILE = "scraped_reviews.json"
JSON_INDENT = 2

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "review_scraper.log"
