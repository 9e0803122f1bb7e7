"""
Catalog engine module.
Owns the movie records, applies add/rate/vote/remove, and answers lookups and rankings.
"""

import math  # finite-number checks for ratings
from numbers import Real  # accept any real number type as a rating
from typing import List, Optional, Tuple  # type annotations for clarity

from rapidfuzz import process, fuzz  # fuzzy title suggestions

# Import project modules for data structures and components
from .models import ErrorKind, GenreMode, GenreModeError, Movie, PersistenceError, Result  # core data classes
from .genres import GENRES, empty_votes  # fixed genre enumeration
from .storage import CatalogStore  # load/save collaborator

# Import loguru for console logging
from loguru import logger  # simple structured logger


MIN_RATING = 1  # lowest accepted score
MAX_RATING = 5  # highest accepted score
NO_VOTES = "No votes yet"  # top_genre sentinel when every count is zero


def top_voted_genre(movie: Movie) -> str:
	"""Genre with the highest vote count; ties go to the earliest genre in the enumeration."""
	votes = movie.genre_votes or {}  # tolerate a missing map
	best_genre, best_count = NO_VOTES, 0  # nothing beats zero votes
	for genre in GENRES:  # enumeration order decides ties
		count = votes.get(genre, 0)  # missing label counts as 0
		if count > best_count:  # strict: earlier genres win ties
			best_genre, best_count = genre, count
	return best_genre


def _fold(text: Optional[str]) -> str:
	"""Trim and case-fold text for case-insensitive comparisons."""
	return (text or "").strip().casefold()


class MovieCatalog:
	"""
	In-memory movie catalog backed by a CatalogStore.
	Mutations save the full record set after applying; lookups never raise on a miss.
	"""

	def __init__(self, store: CatalogStore):
		self.store = store  # persistence collaborator
		self.mode = store.mode  # genre classification variant, shared with the store
		self.movies: List[Movie] = store.load()  # catalog order = insertion order
		# Monotonic id counter seeded above every loaded id
		self._next_id = max((m.id for m in self.movies), default=0) + 1
		logger.info(f"[Catalog] Ready with {len(self.movies)} movies | mode={self.mode.value} | next_id={self._next_id}")

	def __len__(self) -> int:
		return len(self.movies)

	# ------------------------------------------------------------------
	# Mutations
	# ------------------------------------------------------------------

	def add(self, title: str, director: str, release_year: int, genre: str = "") -> Result:
		"""Insert a new movie; returns its id, or ALREADY_EXISTS for a duplicate title."""
		title = (title or "").strip()  # stored trimmed, original casing kept
		if not title:  # empty input guard
			return Result.failure(ErrorKind.INVALID_TITLE, "Title cannot be empty!")
		if self._find_by_title(title) is not None:  # case-folded uniqueness
			logger.debug(f"[Catalog] Rejected duplicate title '{title}'")
			return Result.failure(ErrorKind.ALREADY_EXISTS, "Movie already exists in the database!")

		# Build the record with the genre field of this catalog's mode
		movie = Movie(id=self._allocate_id(), title=title, director=director, release_year=release_year)
		if self.mode is GenreMode.VOTED:
			movie.genre_votes = empty_votes()  # zero for every genre
		else:
			movie.genre = (genre or "").strip()  # free-text label

		self.movies.append(movie)  # keep insertion order
		logger.info(f"[Catalog] Added movie | id={movie.id} | title='{movie.title}'")
		try:
			self._save()  # persist
		except PersistenceError as e:
			e.movie_id = movie.id  # the record exists in memory, so report its id
			raise
		return Result.success(movie.id)

	def rate(self, movie_id: int, rating) -> Result:
		"""Append a rating in [1, 5] and return the updated average."""
		movie = self.find_by_id(movie_id)  # lookup
		if movie is None:
			return self._not_found()
		if not _valid_rating(rating):  # reject before appending
			return Result.failure(
				ErrorKind.INVALID_RATING,
				f"Invalid rating! Please enter a number between {MIN_RATING} and {MAX_RATING}.",
			)

		movie.ratings.append(float(rating))  # append-only
		logger.info(f"[Catalog] Rated movie | id={movie_id} | rating={rating} | average={movie.average_rating}")
		self._save()  # persist
		return Result.success(movie.average_rating)

	def vote_genre(self, title: str, choice_index: int) -> Result:
		"""Add one vote for GENRES[choice_index] on the movie with this title."""
		self._require_mode(GenreMode.VOTED, "vote_genre")
		movie = self._find_by_title(title)  # case-insensitive exact title
		if movie is None:
			return self._not_found()
		# Only plain ints inside the enumeration are valid choices
		if isinstance(choice_index, bool) or not isinstance(choice_index, int) or not 0 <= choice_index < len(GENRES):
			return Result.failure(ErrorKind.INVALID_CHOICE, "Invalid genre choice!")

		genre = GENRES[choice_index]  # chosen label
		movie.genre_votes[genre] += 1  # exactly one vote
		logger.info(f"[Catalog] Genre vote | id={movie.id} | genre={genre} | votes={movie.genre_votes[genre]}")
		self._save()  # persist
		return Result.success()

	def remove(self, movie_id: int) -> Result:
		"""Delete a movie by id."""
		for index, movie in enumerate(self.movies):  # scan in catalog order
			if movie.id == movie_id:
				del self.movies[index]  # drop the record
				logger.info(f"[Catalog] Removed movie | id={movie_id} | title='{movie.title}'")
				self._save()  # persist
				return Result.success()
		return self._not_found()

	# ------------------------------------------------------------------
	# Reads
	# ------------------------------------------------------------------

	def average_rating(self, movie_id: int) -> Result:
		"""Average of the movie's ratings; the value is None when it has none."""
		movie = self.find_by_id(movie_id)
		if movie is None:
			return self._not_found()
		return Result.success(movie.average_rating)

	def top_genre(self, title: str) -> Result:
		self._require_mode(GenreMode.VOTED, "top_genre")
		movie = self._find_by_title(title)
		if movie is None:
			return self._not_found()
		return Result.success(top_voted_genre(movie))

	def top_rated(self) -> List[Movie]:
		"""
		All movies by descending average rating (unrated count as 0).
		sorted() is stable, so equal averages keep catalog order.
		"""
		ranked = sorted(self.movies, key=lambda m: _ranking_average(m), reverse=True)  # sort
		return [m.copy() for m in ranked]  # snapshots, not live records

	def find_by_id(self, movie_id: int) -> Optional[Movie]:
		for movie in self.movies:
			if movie.id == movie_id:
				return movie
		return None

	def find_by_genre(self, genre: str) -> List[Movie]:
		"""Case-insensitive exact match on the genre label (voted mode: the top-voted genre)."""
		wanted = _fold(genre)  # normalized query
		matches = []  # accumulator in catalog order
		for movie in self.movies:
			label = self.effective_genre(movie)
			if label == NO_VOTES:  # unvoted movies have no genre yet
				continue
			if _fold(label) == wanted:
				matches.append(movie)
		return matches

	def find_by_director(self, director: str) -> List[Movie]:
		wanted = _fold(director)
		return [m for m in self.movies if _fold(m.director) == wanted]

	def find_by_title_keyword(self, keyword: str) -> List[Movie]:
		wanted = _fold(keyword)
		return [m for m in self.movies if wanted in m.title.casefold()]

	def list_summaries(self) -> List[Tuple[int, str]]:
		return [(m.id, m.title) for m in self.movies]

	def suggest_titles(self, query: str, limit: int = 3, min_score: int = 60) -> List[str]:
		"""Closest existing titles to `query`, best first, for "did you mean" hints."""
		titles = [m.title for m in self.movies]  # candidates
		if not titles or not (query or "").strip():  # nothing to compare
			return []
		matches = process.extract(query, titles, scorer=fuzz.WRatio, limit=limit)  # (title, score, index)
		return [title for title, score, _ in matches if score >= min_score]

	def effective_genre(self, movie: Movie) -> str:
		"""Genre label shown for a movie in either mode."""
		if self.mode is GenreMode.VOTED:
			return top_voted_genre(movie)
		return movie.genre or ""

	# ------------------------------------------------------------------
	# Internals
	# ------------------------------------------------------------------

	def _find_by_title(self, title: str) -> Optional[Movie]:
		wanted = _fold(title)  # "Straße" and "STRASSE" fold alike
		for movie in self.movies:
			if movie.title.casefold() == wanted:
				return movie
		return None

	def _allocate_id(self) -> int:
		movie_id = self._next_id  # next free id
		self._next_id += 1  # never handed out twice
		return movie_id

	def _save(self) -> None:
		# PersistenceError propagates; the in-memory change stays applied
		self.store.save(self.movies)

	def _require_mode(self, mode: GenreMode, operation: str) -> None:
		if self.mode is not mode:
			raise GenreModeError(f"{operation} requires a catalog in '{mode.value}' genre mode, not '{self.mode.value}'")

	@staticmethod
	def _not_found() -> Result:
		return Result.failure(ErrorKind.NOT_FOUND, "Movie not found!")


def _valid_rating(rating) -> bool:
	if isinstance(rating, bool) or not isinstance(rating, Real):  # bools are ints; reject them
		return False
	return math.isfinite(rating) and MIN_RATING <= rating <= MAX_RATING


def _ranking_average(movie: Movie) -> float:
	# Unrounded mean so ranking is not distorted by display rounding
	if not movie.ratings:
		return 0.0
	return sum(movie.ratings) / len(movie.ratings)
