"""Column limits enforced before a submission reaches storage."""

from __future__ import annotations

from typing import Final


MAX_TITLE_LENGTH: Final[int] = 255
MAX_CATEGORY_LENGTH: Final[int] = 100
MAX_INGREDIENT_LENGTH: Final[int] = 255
MAX_AMOUNT_LENGTH: Final[int] = 50
MAX_UNIT_LENGTH: Final[int] = 50
MAX_TAG_LENGTH: Final[int] = 100

DEFAULT_PREP_TIME_MINUTES: Final[int] = 0
DEFAULT_COOK_TIME_MINUTES: Final[int] = 0
DEFAULT_SERVINGS: Final[int] = 1
