"""
Response Translation.

Maps G2 review items onto the canonical Review record.
"""

from typing import List, Sequence

import config.settings as settings
from src.agents.normalization import format_review_content
from src.models.g2_response import G2ReviewItem
from src.models.review import Review


def build_tags(product: str, categories: Sequence[str]) -> List[str]:
    """Product identifier first, then every non-empty category name."""
    tags = [product]
    for name in categories:
        if name and name != product:
            tags.append(name)
    return tags


def translate_review(
    item: G2ReviewItem,
    product: str,
    categories: Sequence[str],
    sequence_id: int
) -> Review:
    """
    Translate one upstream item into a canonical Review.

    Args:
        item: Upstream review item
        product: Product identifier the item was fetched for
        categories: Category names from the enclosing response (shared by all items)
        sequence_id: 1-based position of the item within its batch

    Returns:
        Review with truncated rating and an empty reply
    """
    return Review(
        id=sequence_id,
        review_id=item.review_id,
        author=item.reviewer.name,
        platform=settings.PLATFORM,
        title=item.review_title,
        post_content=format_review_content(item.review_content),
        reply_contents="",  # G2 does not separate vendor replies
        timestamp=item.publish_date,
        tags=build_tags(product, categories),
        rating=int(item.review_rating)
    )


def translate_items(
    items: Sequence[G2ReviewItem],
    product: str,
    categories: Sequence[str]
) -> List[Review]:
    """Translate a batch, numbering reviews from 1 in upstream order."""
    return [
        translate_review(item, product, categories, index)
        for index, item in enumerate(items, start=1)
    ]
