"""
G2 upstream response model.

Mirrors the JSON returned by the G2 data API. Missing keys take empty
values; keys present with the wrong JSON type raise UpstreamSchemaError.
"""

import math
from dataclasses import dataclass, field
from typing import Any, List

from src.exceptions import UpstreamSchemaError


def _string(data: dict, *keys: str) -> str:
    """First present key among `keys` as a string ("" when all are absent/null)."""
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise UpstreamSchemaError(
                f"Field '{key}' must be a string, got {type(value).__name__}"
            )
        return value
    return ""


def _integer(data: dict, key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise UpstreamSchemaError(
            f"Field '{key}' must be an integer, got {type(value).__name__}"
        )
    return value


def _number(data: dict, key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UpstreamSchemaError(
            f"Field '{key}' must be a number, got {type(value).__name__}"
        )
    try:
        number = float(value)
    except OverflowError:
        raise UpstreamSchemaError(f"Field '{key}' is out of range")
    if not math.isfinite(number):
        raise UpstreamSchemaError(f"Field '{key}' must be finite, got {value}")
    return number


def _objects(data: dict, key: str) -> List[dict]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise UpstreamSchemaError(f"Field '{key}' must be an array")
    for entry in value:
        if not isinstance(entry, dict):
            raise UpstreamSchemaError(f"Entries of '{key}' must be objects")
    return value


def _object(data: dict, key: str) -> dict:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise UpstreamSchemaError(f"Field '{key}' must be an object")
    return value


@dataclass
class G2Reviewer:
    name: str = ""
    job_title: str = ""
    link: str = ""
    company_size: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "G2Reviewer":
        return cls(
            name=_string(data, "reviewer_name", "name"),
            job_title=_string(data, "reviewer_job_title", "job_title"),
            link=_string(data, "reviewer_link", "link"),
            company_size=_string(data, "reviewer_company_size", "company_size")
        )


@dataclass
class G2QuestionAnswer:
    question: str = ""
    answer: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "G2QuestionAnswer":
        return cls(
            question=_string(data, "question"),
            answer=_string(data, "answer")
        )


@dataclass
class G2ReviewItem:
    """One review as returned by the G2 API."""
    review_id: int = 0
    review_title: str = ""
    review_content: str = ""
    review_question_answers: List[G2QuestionAnswer] = field(default_factory=list)
    review_rating: float = 0.0  # 0-5, may be fractional
    reviewer: G2Reviewer = field(default_factory=G2Reviewer)
    publish_date: str = ""
    review_link: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "G2ReviewItem":
        return cls(
            review_id=_integer(data, "review_id"),
            review_title=_string(data, "review_title"),
            review_content=_string(data, "review_content"),
            review_question_answers=[
                G2QuestionAnswer.from_dict(qa)
                for qa in _objects(data, "review_question_answers")
            ],
            review_rating=_number(data, "review_rating"),
            reviewer=G2Reviewer.from_dict(_object(data, "reviewer")),
            publish_date=_string(data, "publish_date"),
            review_link=_string(data, "review_link")
        )


@dataclass
class G2Response:
    """
    Full body of a g2-products response.

    `initial_reviews` and `all_reviews` frequently hold the same reviews;
    see selected_items() for which one is used.
    """
    product_id: int = 0
    product_name: str = ""
    categories: List[str] = field(default_factory=list)
    initial_reviews: List[G2ReviewItem] = field(default_factory=list)
    all_reviews: List[G2ReviewItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "G2Response":
        if not isinstance(data, dict):
            raise UpstreamSchemaError(
                f"Expected a JSON object, got {type(data).__name__}"
            )
        return cls(
            product_id=_integer(data, "product_id"),
            product_name=_string(data, "product_name"),
            categories=[_string(c, "name") for c in _objects(data, "categories")],
            initial_reviews=[
                G2ReviewItem.from_dict(item) for item in _objects(data, "initial_reviews")
            ],
            all_reviews=[
                G2ReviewItem.from_dict(item) for item in _objects(data, "all_reviews")
            ]
        )

    def selected_items(self) -> List[G2ReviewItem]:
        """
        Review items to translate.

        `initial_reviews` wins whenever it is non-empty; `all_reviews` is used
        only when `initial_reviews` is empty. The two are never merged.
        """
        if self.initial_reviews:
            return list(self.initial_reviews)
        return list(self.all_reviews)
