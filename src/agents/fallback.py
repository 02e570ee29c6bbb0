"""
Mock Review Generator.

Produces synthetic reviews for a product when live fetching is disabled
or has failed, so every run yields output for every product.
"""

import calendar
import logging
from datetime import datetime, timedelta
from typing import Callable, List

import config.settings as settings
from src.agents.normalization import format_review_content
from src.models.review import Review

logger = logging.getLogger(__name__)


def _one_month_before(moment: datetime) -> datetime:
    """Same wall-clock time one calendar month earlier, day clamped to month length."""
    year, month = moment.year, moment.month - 1
    if month == 0:
        year, month = year - 1, 12
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _rfc3339(moment: datetime) -> str:
    """Seconds-precision RFC 3339, with "Z" for a zero UTC offset."""
    text = moment.isoformat(timespec="seconds")
    if moment.utcoffset() == timedelta(0):
        text = text[:-len("+00:00")] + "Z"
    return text


class MockReviewGenerator:
    """
    Generates two fixed-shape reviews per product.

    Field shapes are deterministic; timestamps come from the clock ("now" and
    one month ago), so output is reproducible in shape only.
    """

    def __init__(self, clock: Callable[[], datetime] = _local_now):
        """
        Args:
            clock: Returns the current timezone-aware time
        """
        self.clock = clock

    def generate(self, product: str) -> List[Review]:
        logger.info(f"Creating mock reviews for {product}")
        now = self.clock()

        # G2-style body: survey questions interleaved with answers
        survey_body = (
            f"What do you like best about {product}?\n"
            "Great DNS tool and all core network service are centrally managed\n"
            "\n"
            f"What do you dislike about {product}?\n"
            "The license price is very high and the feeds are limited for threat Intel\n"
            "\n"
            f"What problems is {product} solving and how is that benefiting you?\n"
            "Assists us in protecting the DNS service"
        )

        return [
            Review(
                id=1,
                review_id=101,
                author="John Doe",
                platform=settings.PLATFORM,
                title=f"Great experience with {product}",
                post_content=format_review_content(survey_body),
                reply_contents="Thank you for your review! We're glad you're enjoying our product.",
                timestamp=_rfc3339(now),
                tags=["Enterprise", "Easy to use", product],
                rating=5
            ),
            Review(
                id=2,
                review_id=102,
                author="Jane Smith",
                platform=settings.PLATFORM,
                title=f"Mixed feelings about {product}",
                post_content=f"The {product} product has good features but the UI needs improvement.",
                reply_contents="",
                timestamp=_rfc3339(_one_month_before(now)),
                tags=["Mid-market", product],
                rating=3
            ),
        ]
