"""
Run configuration model.

Options for a single scrape run, built once by the CLI and consumed by the
orchestrator.
"""

from dataclasses import dataclass

import config.settings as settings
from src.exceptions import ConfigurationError


@dataclass(frozen=True)
class ScrapeOptions:
    api_key: str = ""  # Empty means look in the environment
    product_name: str = ""  # Empty means every known product
    max_reviews: int = settings.DEFAULT_MAX_REVIEWS
    output_file: str = settings.DEFAULT_OUTPUT_FILE
    use_mock: bool = False

    def __post_init__(self):
        if self.max_reviews < 1:
            raise ConfigurationError(
                f"Invalid max_reviews: {self.max_reviews}. Must be at least 1"
            )
        if not self.output_file:
            raise ConfigurationError("output_file must not be empty")
