"""
Genre Templates

Opening prompts for each genre the AI can start a session in. "freewriting"
has no template: the human writes first.
"""

from typing import Dict, List, Optional

FREE_WRITING = "freewriting"

_OPENING = "Generate a compelling opening phrase or sentence for a creative writing exercise."

GENRE_PROMPTS: Dict[str, str] = {
    "hardboiled": (
        f"{_OPENING} Provide a long paragraph of text in the style of a hard boiled detective novel, "
        "in the manner of Raymond Chandler, Elmore Leonard or Dashiell Hammett. The protagonist is a "
        "street smart, wise-cracking private investigator, and a femme fatale becomes their undoing. "
        "Use gritty settings: back alleys, dingy bars, seedy journalists, pay-by-the-hour motels, "
        "cigarette smoke, crooked cops. The setting feels like a 1950s city, though futuristic hard "
        "boiled worlds in the vein of Blade Runner or William Gibson also work. Keep the style terse, "
        "focused on dialogue and action, cynical and world-weary, with mystery, crime and moral "
        "ambiguity around a complex case in a dangerous underworld."
    ),
    "fantasy": (
        f"{_OPENING} Provide a long paragraph of text in the style of high fantasy. Think Tolkien, "
        "George R.R. Martin, or Terry Pratchett. Include elements such as magic, mythical creatures, "
        "ancient prophecies, or epic quests, set in a medieval-inspired world with its own cultures, "
        "races, and geography. Focus on world-building and a sense of wonder and adventure."
    ),
    "scifi": (
        f"{_OPENING} Provide a long paragraph of text in the style of science fiction. Consider "
        "authors like Isaac Asimov, Ursula K. Le Guin, or Neal Stephenson. Include advanced "
        "technology, space exploration, artificial intelligence, or dystopian/utopian societies, and "
        "explore the philosophical and ethical questions scientific advancement raises."
    ),
    "cyberpunk": (
        f"{_OPENING} Provide a long paragraph of text in the style of cyberpunk fiction. Think "
        "William Gibson, Neal Stephenson, or Philip K. Dick: a neon-drenched city under perpetual "
        "rain, the line between human and machine blurred, corporate megasystems controlling every "
        "aspect of life while hackers, mercenaries and augmented outcasts fight in the shadows. "
        "Capture urban alienation, high-tech intrigue, and the struggle for freedom, perhaps through "
        "an expert hacker set on the ultimate hack against the elites who own nearly everything."
    ),
    "horror": (
        f"{_OPENING} Provide a long paragraph of text in the style of horror fiction. Think Stephen "
        "King, H.P. Lovecraft, or Shirley Jackson. Create an atmosphere of dread, unease, or "
        "impending doom with the supernatural, psychological terror, or unsettling scenarios that "
        "play on common fears. Build tension and a sense of the unknown."
    ),
    "romance": (
        f"{_OPENING} Provide a long paragraph of text in the style of romance fiction. Consider "
        "authors like Jane Austen, Nicholas Sparks, or Nora Roberts. Focus on emotional connection, "
        "longing, or the first encounter between potential lovers; establish chemistry and hint at "
        "the obstacles that might stand in the way of their relationship."
    ),
    "western": (
        f"{_OPENING} Provide a long paragraph of text in the style of a western novel. Think Cormac "
        "McCarthy, Louis L'Amour, or Zane Grey. Include frontier life, cowboys, lawmen, outlaws, or "
        "settlers in the 19th century American West, with rugged landscapes, small frontier towns, "
        "and themes of justice, survival, honor, or redemption."
    ),
    "poetry": (
        "Generate a compelling poetic opening for a creative writing exercise. Provide a stanza of "
        "about 4-6 lines with evocative imagery, metaphor, and rhythm. It should have emotional "
        "depth and a strong sense of atmosphere, in any accessible poetic style."
    ),
    "solarpunk": (
        f"{_OPENING} Provide a paragraph of text in the style of a Solarpunk adventure novel, set in "
        "a land where AI companions act as benevolent muses for people free to actualize themselves "
        "as creators, craftspeople, traders, explorers, farmers, builders and technologists. "
        "Technology and nature coexist, with themes of sustainability, community, and social "
        "justice. Keep the writing engaging, imaginative, and optimistic."
    ),
    "rap": (
        "Generate a compelling opening for a creative writing exercise. Provide a verse in the style "
        "of modern rap lyrics, using rhyme, rhythm, and wordplay, with a strong voice, clever "
        "metaphors, and vivid imagery in the vein of Kendrick Lamar, Nicki Minaj, or J. Cole. Avoid "
        "explicit content, but keep it authentic and impactful."
    ),
}

GENRE_LABELS: Dict[str, str] = {
    "hardboiled": "Hard Boiled",
    "fantasy": "Fantasy",
    "scifi": "Science Fiction",
    "cyberpunk": "Cyberpunk",
    "horror": "Horror",
    "romance": "Romance",
    "western": "Western",
    "poetry": "Poetry",
    "solarpunk": "Solarpunk",
    "rap": "Rap",
    FREE_WRITING: "Free Writing",
}


def get_genres() -> List[str]:
    """All selectable genres, templated ones first."""
    return list(GENRE_PROMPTS) + [FREE_WRITING]


def get_genre_prompt(genre: str) -> Optional[str]:
    """Opening prompt for a genre, or None for free writing / unknown genres."""
    return GENRE_PROMPTS.get(genre)


def is_known_genre(genre: str) -> bool:
    return genre == FREE_WRITING or genre in GENRE_PROMPTS


def is_free_writing(genre: str) -> bool:
    return genre == FREE_WRITING
