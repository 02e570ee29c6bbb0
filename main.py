"""
G2 Review Scraper

CLI entry point for collecting product reviews into a JSON file.
"""

import argparse
import logging
import sys

from dotenv import find_dotenv, load_dotenv

from src.exceptions import ScraperError
from src.models.scrape_options import ScrapeOptions
from src.orchestrator import ScrapeOrchestrator
from src.utils.storage import ReviewStorage
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Collect G2 reviews for the known products into one JSON file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  # Fetch every known product
  python main.py --apikey <key>

  # One product, at most 50 reviews
  python main.py --product bloxone-ddi --max 50

  # No network, synthetic data only
  python main.py --mock

Known products: {', '.join(settings.VALID_PRODUCTS)}
The API key may also come from {settings.API_KEY_ENV_VAR} (environment or .env file).
        """
    )

    parser.add_argument(
        "--apikey",
        default="",
        help="RapidAPI key for the G2 data API"
    )

    parser.add_argument(
        "--product",
        default="",
        help="Product name (default: all known products)"
    )

    parser.add_argument(
        "--max",
        type=int,
        default=settings.DEFAULT_MAX_REVIEWS,
        help=f"Maximum number of reviews to fetch (default: {settings.DEFAULT_MAX_REVIEWS})"
    )

    parser.add_argument(
        "--output",
        default=settings.DEFAULT_OUTPUT_FILE,
        help=f"Path to save scraped reviews (default: {settings.DEFAULT_OUTPUT_FILE})"
    )

    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use mock data instead of API calls"
    )

    parser.add_argument(
        "--skip-scrape",
        action="store_true",
        help="Skip scraping and check the existing output file instead"
    )

    parser.add_argument(
        "--debug-dir",
        default=str(settings.DEBUG_DIR),
        help="Directory for raw API response dumps"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def main(argv=None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    load_dotenv(find_dotenv(usecwd=True))

    storage = ReviewStorage(debug_dir=args.debug_dir)

    try:
        if args.skip_scrape:
            logger.info("Skipping scrape phase as requested")
            reviews = storage.load_reviews(args.output)
            logger.info(f"Found {len(reviews)} existing reviews in {args.output}")
            return 0

        options = ScrapeOptions(
            api_key=args.apikey,
            product_name=args.product,
            max_reviews=args.max,
            output_file=args.output,
            use_mock=args.mock
        )

        logger.info("Starting review scrape...")
        ScrapeOrchestrator(storage=storage).run(options)
        logger.info(f"Scraping complete. Reviews saved to {args.output}")
        return 0

    except KeyboardInterrupt:
        logger.warning("Scrape interrupted by user")
        return 1

    except ScraperError as e:
        logger.error(f"Scraping failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
