"""
Response Length Policy

Maps the writer's length preference to a token budget for the completion
call and a word-count hint for the prompt. The opener gets a slightly
smaller budget than continuations; "match" mirrors the human's last
contribution.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from .logging_config import get_logger

logger = get_logger(__name__)


class LengthSetting(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    MATCH = "match"


@dataclass(frozen=True)
class LengthBudget:
    """Generation size for one AI turn."""
    max_tokens: int
    word_hint: str


# setting -> (opener max_tokens, continuation max_tokens, word hint)
LENGTH_TABLE: Dict[LengthSetting, tuple] = {
    LengthSetting.SHORT: (30, 40, "one sentence"),
    LengthSetting.MEDIUM: (120, 150, "~80"),
    LengthSetting.LONG: (200, 250, "~150"),
}

LENGTH_LABELS = {
    LengthSetting.SHORT: "Short",
    LengthSetting.MEDIUM: "Medium",
    LengthSetting.LONG: "Long",
    LengthSetting.MATCH: "Match User",
}


class ResponseLengthPolicy:
    """Pure mapping from length preference to a LengthBudget."""

    def resolve(
        self,
        setting,
        last_human_word_count: Optional[int] = 0,
        opener: bool = False
    ) -> LengthBudget:
        """
        Compute the budget for the next AI turn.

        Args:
            setting: A LengthSetting or its string value
            last_human_word_count: Words the human added last turn (for "match")
            opener: True for the session's first AI contribution

        Returns:
            LengthBudget with max_tokens and word_hint
        """
        setting = self._coerce(setting)
        words = last_human_word_count or 0

        if setting is LengthSetting.MATCH:
            # Token budget stays at medium; only the hint follows the human
            opener_tokens, continuation_tokens, hint = LENGTH_TABLE[LengthSetting.MEDIUM]
            if words > 0:
                hint = f"approximately {words}"
        else:
            opener_tokens, continuation_tokens, hint = LENGTH_TABLE[setting]

        return LengthBudget(
            max_tokens=opener_tokens if opener else continuation_tokens,
            word_hint=hint
        )

    @staticmethod
    def _coerce(setting) -> LengthSetting:
        if isinstance(setting, LengthSetting):
            return setting
        try:
            return LengthSetting(str(setting).lower())
        except ValueError:
            logger.warning(f"Unknown length setting '{setting}', using medium")
            return LengthSetting.MEDIUM


def describe_budget(setting, budget: LengthBudget, last_human_word_count: int = 0) -> str:
    """One-line, human-readable note about the chosen length (for the console)."""
    setting = ResponseLengthPolicy._coerce(setting)
    if setting is LengthSetting.MATCH:
        if last_human_word_count > 0:
            return f"AI will respond with ~{last_human_word_count} words to match your input"
        return "Match selected but no user input yet, using medium length"
    return f"Using AI muse length setting: {setting.value} ({budget.word_hint} words)"
