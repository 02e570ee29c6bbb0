"""
Review data model.

Canonical review record persisted to the output file, independent of the
upstream schema it was translated from.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Review:
    """
    Canonical review record.
    Sequence ids restart at 1 for every product batch.
    """
    id: int  # 1-based position within its product batch
    review_id: int  # Upstream id, may collide across products
    author: str
    platform: str
    title: str
    post_content: str  # Normalized body, prompts stripped
    reply_contents: str = ""
    timestamp: str = ""  # ISO-8601
    tags: List[str] = field(default_factory=list)
    rating: int = 0

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def ensure_tag(self, tag: str) -> None:
        """Append tag unless already present."""
        if not self.has_tag(tag):
            self.tags.append(tag)

    @classmethod
    def from_dict(cls, data: dict) -> "Review":
        """Create Review from output-file JSON dict."""
        return cls(
            id=data["id"],
            review_id=data.get("reviewID", 0),
            author=data.get("author", ""),
            platform=data.get("platform", ""),
            title=data.get("Title", ""),
            post_content=data.get("Postcontent", ""),
            reply_contents=data.get("replyContents", ""),
            timestamp=data.get("timestamp", ""),
            tags=list(data.get("tags") or []),
            rating=data.get("rating", 0)
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict using output-file field names."""
        return {
            "id": self.id,
            "reviewID": self.review_id,
            "author": self.author,
            "platform": self.platform,
            "Title": self.title,
            "Postcontent": self.post_content,
            "replyContents": self.reply_contents,
            "timestamp": self.timestamp,
            "tags": self.tags,
            "rating": self.rating
        }
