"""
Data models for the Movie Catalog.
Defines the core data structures used throughout the system.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Enum gives readable names to the fixed sets of modes and error kinds
from enum import Enum  # string-valued enumerations
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, List, Optional  # containers and optional values


class GenreMode(str, Enum):
	"""How a catalog classifies genres: one free-text label, or votes per fixed genre."""
	SINGLE = "single"  # free-text label set once at creation
	VOTED = "voted"  # vote counts over the fixed genre enumeration


class ErrorKind(str, Enum):
	"""Expected, recoverable outcomes of catalog operations."""
	NOT_FOUND = "not_found"  # id or title lookup miss
	ALREADY_EXISTS = "already_exists"  # duplicate title on add
	INVALID_RATING = "invalid_rating"  # non-numeric or outside [1, 5]
	INVALID_CHOICE = "invalid_choice"  # genre index outside the enumeration
	INVALID_TITLE = "invalid_title"  # empty title on add


class PersistenceError(Exception):
	"""Raised when the catalog file cannot be written."""

	def __init__(self, message: str, movie_id: Optional[int] = None):
		super().__init__(message)
		self.movie_id = movie_id  # set when a just-added movie is in memory but unsaved


class GenreModeError(RuntimeError):
	"""Raised when an operation is called on a catalog in the wrong genre mode."""
	pass


@dataclass
class Movie:
	"""
	Represents a single movie in the catalog.
	Exactly one of `genre` / `genre_votes` is used, depending on the catalog's GenreMode.
	"""
	id: int  # unique identifier, assigned by the catalog
	title: str  # title as entered (trimmed), compared case-insensitively
	director: str  # director's name as entered
	release_year: int  # release year as a number (e.g., 2010)
	genre: Optional[str] = None  # single mode: free-text genre label
	genre_votes: Optional[Dict[str, int]] = None  # voted mode: genre -> vote count
	ratings: List[float] = field(default_factory=list)  # append-only scores in [1, 5]

	@property
	def average_rating(self) -> Optional[float]:
		"""Mean of ratings rounded to 2 decimals, or None when unrated."""
		if not self.ratings:
			return None
		return round(sum(self.ratings) / len(self.ratings), 2)

	def copy(self) -> "Movie":
		"""Return a snapshot that shares no mutable state with this record."""
		return Movie(
			id=self.id,
			title=self.title,
			director=self.director,
			release_year=self.release_year,
			genre=self.genre,
			genre_votes=dict(self.genre_votes) if self.genre_votes is not None else None,
			ratings=list(self.ratings),
		)


@dataclass
class Result:
	"""
	Outcome of a catalog operation: either a value or an ErrorKind with a user-facing message.
	"""
	value: Any = None  # payload on success (id, average, label, ...)
	error: Optional[ErrorKind] = None  # set on failure
	message: str = ""  # human-readable explanation of the failure

	@property
	def ok(self) -> bool:
		return self.error is None

	@classmethod
	def success(cls, value: Any = None) -> "Result":
		return cls(value=value)

	@classmethod
	def failure(cls, error: ErrorKind, message: str) -> "Result":
		return cls(error=error, message=message)
