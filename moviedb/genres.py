"""
Genre vocabulary.
Holds the fixed genre enumeration used for voting and resolves free-text genre names to it.
"""

import re  # tokenize free-text input
from typing import Dict, List, Optional  # type annotations

from rapidfuzz import process, fuzz  # fuzzy matching utilities

from loguru import logger  # console logging


# Fixed, closed enumeration; order defines menu numbering and top-genre tie-breaks
GENRES: List[str] = [
	'Action',
	'Adventure',
	'Animation',
	'Biography',
	'Comedy',
	'Crime',
	'Documentary',
	'Drama',
	'Family',
	'Fantasy',
	'Horror',
	'Musical',
	'Mystery',
	'Romance',
	'Science Fiction',
	'Sport',
	'Thriller',
	'War',
	'Western',
]

# Genre synonym mapping: common user phrasings → single standard name
GENRE_SYNONYMS: Dict[str, str] = {
	'sci-fi': 'Science Fiction',  # map hyphenated to canonical
	'sci fi': 'Science Fiction',  # map spaced form
	'sci fy': 'Science Fiction',  # common misspelling with y
	'science-fiction': 'Science Fiction',  # map with dash
	'scifi': 'Science Fiction',  # common variant
	'sci-fy': 'Science Fiction',  # typo variant
	'funny': 'Comedy',
	'romantic': 'Romance',
	'animated': 'Animation',
	'biographical': 'Biography',
	'sports': 'Sport',
}

# Minimum rapidfuzz ratio for a token to count as a genre name
FUZZY_THRESHOLD = 88

_LOWER_TO_GENRE = {g.lower(): g for g in GENRES}


def empty_votes() -> Dict[str, int]:
	"""Zero-initialized vote map covering every genre in the enumeration."""
	return {g: 0 for g in GENRES}


def normalize_votes(votes: Dict[str, int]) -> Dict[str, int]:
	"""
	Project an arbitrary mapping onto the enumeration.
	Unknown labels are dropped, missing ones become 0, negative counts clamp to 0.
	"""
	normalized = empty_votes()
	for label, count in votes.items():
		genre = _LOWER_TO_GENRE.get(str(label).strip().lower())
		if genre is None:
			logger.debug(f"[Genres] Dropping unknown genre label '{label}'")
			continue
		normalized[genre] = max(0, int(count))
	return normalized


def resolve_genre(text: str) -> Optional[str]:
	"""
	Map free text to a canonical genre from the enumeration.
	Tries exact names, then synonyms, then fuzzy token matching. Returns None if nothing fits.
	"""
	q = (text or '').strip().lower()  # normalize spaces and casing
	if not q:
		return None

	# Exact canonical name
	if q in _LOWER_TO_GENRE:
		return _LOWER_TO_GENRE[q]

	# Synonym substring matches (e.g., "sci-fi" -> "Science Fiction")
	for key, val in GENRE_SYNONYMS.items():
		if key in q:
			logger.debug(f"[Genres] Synonym match: '{key}' -> '{val}'")
			return val

	# Fuzzy match on the whole phrase first, then per token to handle small typos
	candidates = [q] + re.findall(r"[a-z]+", q)
	choices = list(_LOWER_TO_GENRE.keys())
	for token in candidates:
		match = process.extractOne(token, choices, scorer=fuzz.ratio)
		if match and match[1] >= FUZZY_THRESHOLD:
			logger.debug(f"[Genres] Fuzzy match: '{token}' -> '{match[0]}' (score={match[1]:.0f})")
			return _LOWER_TO_GENRE[match[0]]

	return None


def genre_index(text: str) -> Optional[int]:
	"""Zero-based position of the genre that `text` resolves to, or None."""
	genre = resolve_genre(text)
	if genre is None:
		return None
	return GENRES.index(genre)
