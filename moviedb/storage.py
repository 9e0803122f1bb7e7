"""
Persistence module.
Reads and writes the catalog file (a JSON array of movie rows) and loads JSON Lines imports.
"""

# Standard libs for JSON parsing, numeric checks, typing, and paths
import json  # read/write JSON documents
import math  # finite-number checks for ratings
from typing import Any, Dict, List, Optional  # type hints
from pathlib import Path  # filesystem-safe paths

# Pydantic describes the on-disk row shape and validates it on load
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Import our data classes used across the project
from .models import GenreMode, Movie, PersistenceError  # record, mode, and write failure
from .genres import empty_votes, normalize_votes  # keep vote maps aligned with the enumeration

# Console logging
from loguru import logger  # console logger


class MovieRow(BaseModel):
	"""
	Serialized shape of one movie in the catalog file.
	Field aliases match the file's camelCase keys.
	"""
	model_config = ConfigDict(populate_by_name=True)

	id: int  # unique id
	title: str  # non-empty title
	director: str = ''  # director name
	release_year: int = Field(0, alias='releaseYear')  # release year
	genre: Optional[str] = None  # single mode label
	genre_votes: Optional[Dict[str, int]] = Field(None, alias='genreVotes')  # voted mode counts
	ratings: List[float] = Field(default_factory=list)  # scores in [1, 5]

	@field_validator('title')
	@classmethod
	def _title_not_empty(cls, value: str) -> str:
		value = value.strip()
		if not value:
			raise ValueError('title must not be empty')
		return value

	@field_validator('ratings')
	@classmethod
	def _ratings_in_range(cls, value: List[float]) -> List[float]:
		for rating in value:
			if not math.isfinite(rating) or not 1 <= rating <= 5:
				raise ValueError(f'rating {rating} outside [1, 5]')
		return value


class CatalogStore:
	"""
	File-backed persistence for the catalog.
	Missing or unreadable files load as an empty catalog; write failures raise PersistenceError.
	"""

	def __init__(self, path, mode: GenreMode = GenreMode.SINGLE):
		self.path = Path(path)  # catalog file location
		self.mode = mode  # decides which genre field is written

	def load(self) -> List[Movie]:
		"""Read every valid row from the catalog file."""
		if not self.path.exists():
			logger.info(f"[Storage] No catalog at {self.path}; starting empty")
			return []

		try:
			with open(self.path, 'r', encoding='utf-8') as f:
				data = json.load(f)
		except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
			logger.warning(f"[Storage] Could not read {self.path}, starting empty: {e}")
			return []

		if not isinstance(data, list):
			logger.warning(f"[Storage] Expected a JSON array in {self.path}, got {type(data).__name__}; starting empty")
			return []

		movies: List[Movie] = []
		seen_ids = set()
		for position, raw in enumerate(data):
			try:
				row = MovieRow.model_validate(raw)
			except ValidationError as e:
				logger.warning(f"[Storage] Skipping invalid row {position}: {e.errors()[0]['msg']}")
				continue
			if row.id in seen_ids:
				logger.warning(f"[Storage] Skipping row {position}: duplicate id {row.id}")
				continue
			seen_ids.add(row.id)
			movies.append(self._to_movie(row))

		logger.info(f"[Storage] Loaded {len(movies)} movies from {self.path}")
		return movies

	def save(self, movies: List[Movie]) -> None:
		"""
		Overwrite the catalog file with the full record set.
		Writes a sibling temp file first so a failed write leaves the previous file intact.
		"""
		rows = [self.to_row(m) for m in movies]
		tmp_path = self.path.with_name(self.path.name + '.tmp')
		try:
			self.path.parent.mkdir(parents=True, exist_ok=True)
			with open(tmp_path, 'w', encoding='utf-8') as f:
				json.dump(rows, f, indent=2, ensure_ascii=False)
			tmp_path.replace(self.path)
		except OSError as e:
			logger.error(f"[Storage] Failed to write {self.path}: {e}")
			raise PersistenceError(f"Could not save catalog to {self.path}: {e}") from e
		logger.debug(f"[Storage] Saved {len(rows)} movies to {self.path}")

	def to_row(self, movie: Movie) -> Dict[str, Any]:
		"""Serialize a movie into the file's flat keyed shape."""
		row = MovieRow(
			id=movie.id,
			title=movie.title,
			director=movie.director,
			release_year=movie.release_year,
			ratings=list(movie.ratings),
		)
		if self.mode is GenreMode.VOTED:
			row.genre_votes = dict(movie.genre_votes or empty_votes())
		else:
			row.genre = movie.genre or ''
		return row.model_dump(by_alias=True, exclude_none=True)

	def _to_movie(self, row: MovieRow) -> Movie:
		movie = Movie(
			id=row.id,
			title=row.title,
			director=row.director,
			release_year=row.release_year,
			ratings=list(row.ratings),
		)
		# A row written in the other mode gets this mode's default genre field
		if self.mode is GenreMode.VOTED:
			movie.genre_votes = normalize_votes(row.genre_votes or {})
		else:
			movie.genre = row.genre or ''
		return movie


def load_movies_from_jsonl(filepath) -> List[Dict[str, Any]]:
	"""
	Load movie entries from a JSON Lines (JSONL) file where each line is one JSON object.
	Returns dicts with keys title, director, release_year, genre; malformed lines are skipped.
	"""
	entries = []  # accumulator for parsed entries
	filepath = Path(filepath)  # normalize path

	# Validate the file presence early to give clear error messages
	if not filepath.exists():
		raise FileNotFoundError(f"Movie data file not found: {filepath}")

	logger.info(f"[Storage] Loading movies from {filepath}...")

	with open(filepath, 'r', encoding='utf-8') as f:
		for line_num, line in enumerate(f, 1):  # keep track of line number for diagnostics
			if not line.strip():
				continue
			try:
				data = json.loads(line.strip())  # parse JSON object per line
				entries.append(_parse_entry(data))
			except json.JSONDecodeError as e:
				logger.warning(f"[Storage] Skipping invalid JSON at line {line_num}: {e}")
				continue
			except (TypeError, ValueError, AttributeError) as e:
				logger.warning(f"[Storage] Error parsing movie at line {line_num}: {e}")
				continue

	logger.info(f"[Storage] Successfully read {len(entries)} movies.")
	return entries


def _parse_entry(data: Dict) -> Dict[str, Any]:
	"""Convert a raw import object into add() arguments with safe defaults."""
	year = data.get('releaseYear', data.get('year'))
	genre = data.get('genre', '')
	# Accept list or comma-separated genres; a single-label catalog keeps the first one
	if isinstance(genre, list):
		genre = genre[0] if genre else ''
	elif isinstance(genre, str) and ',' in genre:
		genre = genre.split(',')[0]
	return {
		'title': str(data.get('title') or ''),
		'director': str(data.get('director') or ''),
		'release_year': int(year) if year else 0,
		'genre': str(genre or '').strip(),
	}
