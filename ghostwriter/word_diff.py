"""
Word Diff - what did the human add during their turn?

Compares the plain text captured when the human turn opened with the text
at turn end. Only appends and prepends are recognised precisely; any other
edit (inserting mid-document, rewriting earlier AI text) counts the whole
post-turn text as added. That overcounts on interior edits and is a known
precision limit of the measurement, not something callers should correct.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HumanContribution:
    """Text judged to be added by the human, and its size in words."""
    text: str
    word_count: int

    @property
    def is_empty(self) -> bool:
        return self.word_count == 0


class WordDiffEngine:
    """Extracts the human's addition between two plain-text snapshots."""

    def diff(self, before: str, after: str) -> str:
        """
        Return the text added between `before` and `after`.

        Both snapshots are stripped first so trailing whitespace (including
        the sentinel left behind by the AI stream) does not count as typing.
        """
        before = (before or "").strip()
        after = (after or "").strip()

        if len(after) <= len(before):
            return ""
        if after.startswith(before):
            return after[len(before):].strip()
        if after.endswith(before):
            return after[:len(after) - len(before)].strip()
        # Interior edit: no precise diff attempted
        return after

    @staticmethod
    def count_words(text: str) -> int:
        if not text:
            return 0
        return len(text.split())

    def measure(self, before: str, after: str) -> HumanContribution:
        """Diff the snapshots and count the words of the addition."""
        added = self.diff(before, after)
        if not added.strip():
            return HumanContribution(text="", word_count=0)
        return HumanContribution(text=added, word_count=self.count_words(added))
