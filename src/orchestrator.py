"""
Scrape Orchestrator.

Runs one scrape: resolves credentials and products, fetches (or mocks) the
reviews for each product in turn, and writes the combined output file.
"""

import logging
import os
import time
from typing import Callable, List, Mapping, Optional, Sequence, Tuple

import config.settings as settings
from src.agents.fallback import MockReviewGenerator
from src.agents.g2_client import G2Client
from src.exceptions import ConfigurationError, ScraperError
from src.models.review import Review
from src.models.scrape_options import ScrapeOptions
from src.utils.storage import ReviewStorage

logger = logging.getLogger(__name__)


class ScrapeOrchestrator:
    """
    Coordinates a single scrape run.

    Products are processed sequentially:
    fetch → (on failure) mock fallback → tag check → aggregate.
    After all products: persist.

    A failing product never aborts the run; only configuration and
    persistence errors do.
    """

    def __init__(
        self,
        valid_products: Sequence[str] = settings.VALID_PRODUCTS,
        storage: Optional[ReviewStorage] = None,
        mock_generator: Optional[MockReviewGenerator] = None,
        client_factory: Optional[Callable[[str], G2Client]] = None,
        sleep: Callable[[float], None] = time.sleep,
        environ: Optional[Mapping[str, str]] = None,
        max_retries: int = settings.MAX_RETRIES,
        courtesy_delay_seconds: float = settings.COURTESY_DELAY_SECONDS
    ):
        """
        Initialize orchestrator.

        Args:
            valid_products: Allow-list of product identifiers, in iteration order
            storage: Output writer (also receives debug artifacts)
            mock_generator: Source of fallback reviews
            client_factory: Builds an API client from an API key
            sleep: Used for the courtesy delay between products
            environ: Where to look up the API key when none is given
            max_retries: 429 retry budget per product
            courtesy_delay_seconds: Pause between live product fetches
        """
        self.valid_products: Tuple[str, ...] = tuple(valid_products)
        self.storage = storage or ReviewStorage(debug_dir=str(settings.DEBUG_DIR))
        self.mock_generator = mock_generator or MockReviewGenerator()
        self.client_factory = client_factory or self._default_client
        self.sleep = sleep
        self.environ = os.environ if environ is None else environ
        self.max_retries = max_retries
        self.courtesy_delay_seconds = courtesy_delay_seconds

    def _default_client(self, api_key: str) -> G2Client:
        return G2Client(api_key, storage=self.storage)

    def run(self, options: ScrapeOptions) -> List[Review]:
        """
        Run a complete scrape and write the output file.

        Args:
            options: Run configuration

        Returns:
            The reviews written, in output order

        Raises:
            ConfigurationError: Unknown product requested
            PersistenceError: Output file could not be written
        """
        api_key, use_mock = self.resolve_credentials(options)
        products = self.resolve_products(options.product_name)

        all_reviews = self.collect(products, api_key, use_mock, options.max_reviews)
        logger.info(f"Total reviews collected: {len(all_reviews)}")

        self.storage.save_reviews(all_reviews, options.output_file)
        logger.info(f"All reviews saved to {options.output_file}")
        return all_reviews

    def resolve_credentials(self, options: ScrapeOptions) -> Tuple[str, bool]:
        """
        Effective (api_key, use_mock) for a run.

        A missing key never fails the run: it switches to mock data.
        """
        api_key = options.api_key
        use_mock = options.use_mock

        if not api_key and not use_mock:
            api_key = self.environ.get(settings.API_KEY_ENV_VAR, "")
            if api_key:
                logger.info("Using API key from environment variable")
            else:
                logger.warning(
                    f"No API key provided. Either pass one, set {settings.API_KEY_ENV_VAR} "
                    "in the .env file, or use mock data. Falling back to mock data."
                )
                use_mock = True

        return api_key, use_mock

    def resolve_products(self, product_name: str) -> List[str]:
        """Requested product if valid, every known product if none requested."""
        if not product_name:
            logger.info("No product specified, processing all known products...")
            return list(self.valid_products)

        if product_name not in self.valid_products:
            raise ConfigurationError(
                f"Invalid product name '{product_name}'. "
                f"Choose from: {', '.join(self.valid_products)}"
            )
        return [product_name]

    def collect(
        self,
        products: Sequence[str],
        api_key: str,
        use_mock: bool,
        max_reviews: int
    ) -> List[Review]:
        """Fetch or mock every product and concatenate in product order."""
        all_reviews: List[Review] = []

        if use_mock:
            for product in products:
                all_reviews.extend(self.mock_generator.generate(product))
            return all_reviews

        client = self.client_factory(api_key)
        for index, product in enumerate(products):
            logger.info(f"Fetching reviews for {product} (max: {max_reviews})...")
            try:
                reviews = client.fetch_reviews(product, max_reviews, self.max_retries)
            except ScraperError as e:
                logger.error(f"Error fetching reviews for {product}: {e}")
                logger.warning(f"Falling back to mock data for {product}")
                all_reviews.extend(self.mock_generator.generate(product))
                continue

            logger.info(f"Successfully fetched {len(reviews)} reviews for {product}")
            for review in reviews:
                review.ensure_tag(product)
            all_reviews.extend(reviews)

            # Only a successful fetch is followed by the courtesy delay
            if index < len(products) - 1:
                logger.info(
                    f"Waiting {self.courtesy_delay_seconds} seconds before fetching "
                    "next product to respect rate limits..."
                )
                self.sleep(self.courtesy_delay_seconds)

        return all_reviews
