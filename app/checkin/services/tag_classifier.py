"""
Tag classification for check-ins.

Applies the clean_day override and derives the boolean signals stored on
the canonical check-in record.
"""

from typing import Any, Dict, Optional

from app.checkin.models import TagClassification

CLEAN_DAY_TAG = "clean_day"
INTENSE_EXERCISE_TAG = "intense_exercise"
NEW_SUPPLEMENT_TAG = "new_supplement"


class TagClassifier:
    """Resolves tag exclusivity and signal flags."""

    @classmethod
    def classify(
        cls,
        raw_tags: Any,
        supplement_intake: Any = None,
    ) -> TagClassification:
        """
        Classify submitted tags.

        Args:
            raw_tags: Tag list from the request (anything else counts as no tags)
            supplement_intake: Supplement name -> taken flag

        Returns:
            TagClassification; clean_day replaces the whole tag set with
            the empty set
        """
        tags = cls._normalize_tags(raw_tags)
        if CLEAN_DAY_TAG in tags:
            tags = frozenset()

        return TagClassification(
            tags=tags,
            intense_exercise=INTENSE_EXERCISE_TAG in tags,
            new_supplement=NEW_SUPPLEMENT_TAG in tags,
            supplement_intake=cls._taken_supplements(supplement_intake),
        )

    @staticmethod
    def _normalize_tags(raw_tags: Any) -> frozenset:
        if not isinstance(raw_tags, list):
            return frozenset()
        normalized = (str(tag).strip().lower() for tag in raw_tags if tag is not None)
        return frozenset(tag for tag in normalized if tag)

    @staticmethod
    def _taken_supplements(intake: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(intake, dict):
            return None
        taken = {str(name): value for name, value in intake.items() if value}
        return taken or None
