"""
Prompt construction for AI turns.
"""

from .genres import get_genre_prompt
from .length_policy import LengthBudget
from .providers import CompletionRequest

OPENER_TEMPERATURE = 0.9
CONTINUATION_TEMPERATURE = 0.8  # slightly less random once a story exists

FALLBACK_OPENING = (
    "Generate a compelling opening phrase or sentence for a creative writing exercise. "
    "Provide a paragraph of vivid prose that invites the next writer to continue."
)


def build_system_prompt(word_hint: str, continuation: bool) -> str:
    if continuation:
        situation = "The user has written some text, and you must now continue the story."
    else:
        situation = "You will provide an inspiring prose-based opening to a creative writing story."
    return (
        "You are a creative writer participating in a back-and-forth writing game. "
        f"{situation} Write in the specified genre style. "
        f"Your contribution should be about {word_hint} words. "
        "Only provide the text that continues or starts the story. Do not provide commentary, "
        "questions, or indicate that you are an AI. Do not use quotation marks around your text "
        "unless they are part of the story dialogue. Write compelling, vivid text that builds on "
        "what came before."
    )


def build_user_prompt(genre: str, story_so_far: str = "") -> str:
    if story_so_far:
        return f"Continue this story in the style of {genre} genre. Here is the story so far: {story_so_far}"
    return get_genre_prompt(genre) or FALLBACK_OPENING


def build_request(genre: str, budget: LengthBudget, story_so_far: str = "") -> CompletionRequest:
    """
    Assemble the completion request for the next AI turn.

    Args:
        genre: Selected genre
        budget: Output of ResponseLengthPolicy for this turn
        story_so_far: Plain text of the document; empty for the opener
    """
    continuation = bool(story_so_far.strip())
    return CompletionRequest(
        system_prompt=build_system_prompt(budget.word_hint, continuation),
        user_prompt=build_user_prompt(genre, story_so_far.strip()),
        max_tokens=budget.max_tokens,
        temperature=CONTINUATION_TEMPERATURE if continuation else OPENER_TEMPERATURE
    )
