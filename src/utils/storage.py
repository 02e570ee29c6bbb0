"""
Storage utility.

File I/O for the aggregated review output and the raw-response debug
artifacts written by the API client.
"""

import json
import os
import logging
from typing import List, Optional

import config.settings as settings
from src.exceptions import PersistenceError
from src.models.review import Review

logger = logging.getLogger(__name__)


class ReviewStorage:
    """
    Handles all file I/O for a scrape run.

    Handles:
    - Output file (JSON array of reviews, 2-space indent)
    - Debug artifacts ({debug_dir}/{product}_raw_response.json)
    """

    def __init__(self, debug_dir: Optional[str] = None, indent: int = settings.JSON_INDENT):
        """
        Initialize storage.

        Args:
            debug_dir: Directory for raw-response artifacts, None disables them
            indent: JSON indentation for the output file
        """
        self.debug_dir = debug_dir
        self.indent = indent

    def save_reviews(self, reviews: List[Review], path: str) -> None:
        """
        Write the full review list to `path`, replacing any existing file.

        Raises:
            PersistenceError: If the file cannot be created or written
        """
        payload = [review.to_dict() for review in reviews]
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=self.indent, ensure_ascii=False)
                f.write("\n")
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save reviews to {path}: {e}")
            raise PersistenceError(f"error saving reviews to {path}: {e}") from e

        logger.info(f"Saved {len(reviews)} reviews to {path}")

    def load_reviews(self, path: str) -> List[Review]:
        """
        Load a previously saved output file.

        Raises:
            PersistenceError: If the file is missing or not a review array
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceError(f"error reading reviews from {path}: {e}") from e

        if not isinstance(data, list):
            raise PersistenceError(f"{path} does not contain a JSON array")

        try:
            reviews = [Review.from_dict(entry) for entry in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise PersistenceError(f"malformed review in {path}: {e}") from e

        logger.debug(f"Loaded {len(reviews)} reviews from {path}")
        return reviews

    def save_raw_response(self, product: str, body: bytes) -> Optional[str]:
        """
        Best-effort dump of an unparsed API body for inspection.

        Returns:
            Path written, or None when disabled or the write failed
        """
        if self.debug_dir is None:
            return None

        filepath = os.path.join(self.debug_dir, f"{product}_raw_response.json")
        try:
            with open(filepath, "wb") as f:
                f.write(body)
        except OSError as e:
            logger.debug(f"Could not write debug artifact {filepath}: {e}")
            return None

        logger.debug(f"Saved raw response to {filepath}")
        return filepath
