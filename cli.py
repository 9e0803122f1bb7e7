"""
Interactive console menu for the movie catalog.

Run:   python cli.py [--file movies.json] [--mode single|voted] [--log-level INFO]
or, once installed:   moviedb --mode voted

Reads choices line by line, calls the catalog engine, and prints results as aligned tables.
"""

import argparse  # command-line flags
import sys  # stderr sink for loguru
from typing import Callable, List, Optional, Tuple  # type annotations

from loguru import logger  # console logger

from moviedb import config  # environment-driven defaults
from moviedb.catalog import MovieCatalog  # catalog engine
from moviedb.genres import GENRES, genre_index  # genre enumeration and name resolution
from moviedb.models import ErrorKind, GenreMode, Movie, PersistenceError, Result
from moviedb.storage import CatalogStore  # JSON file persistence


class CatalogCLI:
	"""
	Numbered menu loop over a MovieCatalog.
	`input_fn` / `output_fn` default to input/print and can be swapped for scripted sessions.
	"""

	def __init__(
		self,
		catalog: MovieCatalog,
		input_fn: Callable[[str], str] = input,
		output_fn: Callable[[str], None] = print,
	):
		self.catalog = catalog
		self.input = input_fn
		self.output = output_fn
		self.actions = self._build_menu()  # (label, handler) pairs, numbered from 1

	def _build_menu(self) -> List[Tuple[str, Optional[Callable[[], None]]]]:
		actions = [
			("Add Movie", self.add_movie),
			("Rate a Movie", self.rate_movie),
			("Get Average Rating", self.average_rating),
			("Get Top Rated Movies", self.top_rated),
			("Get Movies by Genre", self.movies_by_genre),
			("Get Movies by Director", self.movies_by_director),
			("Search Movies by Title", self.search_title),
			("Get Movie Details", self.movie_details),
			("Remove Movie", self.remove_movie),
			("List Movies with IDs", self.list_movies),
		]
		if self.catalog.mode is GenreMode.VOTED:
			actions += [
				("Vote for a Genre", self.vote_genre),
				("Get Top Genre", self.top_genre),
			]
		actions.append(("Exit", None))
		return actions

	def run(self) -> None:
		while True:
			self.output("\nMovies Management System")
			for number, (label, _) in enumerate(self.actions, 1):
				self.output(f"{number}. {label}")

			choice = _parse_int(self._ask("Enter your choice: "))
			if choice is None or not 1 <= choice <= len(self.actions):
				self.output("Invalid choice! Try again.")
				continue

			label, handler = self.actions[choice - 1]
			if handler is None:
				self.output("Goodbye!")
				return
			logger.debug(f"[CLI] Menu choice {choice}: {label}")
			try:
				handler()
			except PersistenceError as e:
				# The change is applied in memory; the next successful save will persist it
				self.output(f"Warning: {e}")
				if e.movie_id is not None:
					self.output(f"Movie kept for this session but not saved yet. (ID: {e.movie_id})")

	# ------------------------------------------------------------------
	# Menu actions
	# ------------------------------------------------------------------

	def add_movie(self) -> None:
		title = self._ask("Enter movie title: ")
		director = self._ask("Enter director: ")
		year = _parse_int(self._ask("Enter release year: "))
		if year is None:
			self.output("Invalid year! Please enter a whole number.")
			return
		genre = ""
		if self.catalog.mode is GenreMode.SINGLE:
			genre = self._ask("Enter genre: ")

		result = self.catalog.add(title, director, year, genre)
		if self._report_failure(result):
			return
		self.output(f"Movie Added Successfully! (ID: {result.value})\n")

	def rate_movie(self) -> None:
		movie_id = self._ask_id("Enter movie ID to rate: ")
		if movie_id is None:
			return
		rating = _parse_float(self._ask("Enter rating (1-5): "))
		result = self.catalog.rate(movie_id, rating)
		if self._report_failure(result):
			return
		self.output(f"Rating added successfully! Current average: {result.value:.2f}")

	def average_rating(self) -> None:
		movie_id = self._ask_id("Enter movie ID: ")
		if movie_id is None:
			return
		result = self.catalog.average_rating(movie_id)
		if self._report_failure(result):
			return
		self.output(f"Average Rating: {_fmt_avg(result.value)}\n")

	def top_rated(self) -> None:
		self._show_movies(self.catalog.top_rated())

	def movies_by_genre(self) -> None:
		self._show_movies(self.catalog.find_by_genre(self._ask("Enter genre: ")))

	def movies_by_director(self) -> None:
		self._show_movies(self.catalog.find_by_director(self._ask("Enter director: ")))

	def search_title(self) -> None:
		self._show_movies(self.catalog.find_by_title_keyword(self._ask("Enter keyword: ")))

	def movie_details(self) -> None:
		movie_id = self._ask_id("Enter movie ID: ")
		if movie_id is None:
			return
		movie = self.catalog.find_by_id(movie_id)
		if movie is None:
			self._print_not_found()
			return
		self._show_movies([movie])

	def remove_movie(self) -> None:
		movie_id = self._ask_id("Enter movie ID: ")
		if movie_id is None:
			return
		if self._report_failure(self.catalog.remove(movie_id)):
			return
		self.output("Movie removed successfully!\n")

	def list_movies(self) -> None:
		summaries = self.catalog.list_summaries()
		if not summaries:
			self.output("No movies found!")
			return
		self.output("\nList of Movies with IDs:")
		for line in render_table(["ID", "Title"], [[str(i), t] for i, t in summaries]):
			self.output(line)

	def vote_genre(self) -> None:
		title = self._ask("Enter movie title: ")
		self.output("Genres:")
		for number, genre in enumerate(GENRES, 1):
			self.output(f"{number}. {genre}")
		raw = self._ask("Enter genre number or name: ")
		number = _parse_int(raw)
		# Names ("sci-fi", "comedy") resolve through the synonym map; -1 falls outside the enumeration
		if number is not None:
			index = number - 1
		else:
			resolved = genre_index(raw)
			index = resolved if resolved is not None else -1

		result = self.catalog.vote_genre(title, index)
		if result.error is ErrorKind.NOT_FOUND:
			self._print_not_found(title)
			return
		if self._report_failure(result):
			return
		self.output(f"Vote recorded for {GENRES[index]}!")

	def top_genre(self) -> None:
		title = self._ask("Enter movie title: ")
		result = self.catalog.top_genre(title)
		if result.error is ErrorKind.NOT_FOUND:
			self._print_not_found(title)
			return
		self.output(f"Top Genre: {result.value}")

	# ------------------------------------------------------------------
	# Helpers
	# ------------------------------------------------------------------

	def _ask(self, prompt: str) -> str:
		return self.input(prompt).strip()

	def _ask_id(self, prompt: str) -> Optional[int]:
		movie_id = _parse_int(self._ask(prompt))
		if movie_id is None:
			self.output("Invalid ID! Please enter a whole number.")
		return movie_id

	def _report_failure(self, result: Result) -> bool:
		"""Print the failure message (if any) and tell the caller whether to stop."""
		if result.ok:
			return False
		if result.error is ErrorKind.NOT_FOUND:
			self._print_not_found()
		else:
			self.output(result.message)
		return True

	def _print_not_found(self, title: Optional[str] = None) -> None:
		self.output("Movie not found! Use option 10 to list movies with IDs.")
		if title:
			suggestions = self.catalog.suggest_titles(title)
			if suggestions:
				self.output(f"Did you mean: {', '.join(suggestions)}?")

	def _show_movies(self, movies: List[Movie]) -> None:
		if not movies:
			self.output("No movies found!")
			return
		headers = ["ID", "Title", "Director", "Year", "Genre", "Avg Rating", "Ratings"]
		rows = [
			[
				str(m.id),
				m.title,
				m.director,
				str(m.release_year),
				self.catalog.effective_genre(m),
				_fmt_avg(m.average_rating),
				str(len(m.ratings)),
			]
			for m in movies
		]
		for line in render_table(headers, rows):
			self.output(line)


def render_table(headers: List[str], rows: List[List[str]]) -> List[str]:
	"""Format rows as left-aligned columns under a header and a rule."""
	widths = [len(h) for h in headers]
	for row in rows:
		for col, cell in enumerate(row):
			widths[col] = max(widths[col], len(cell))
	fmt = " | ".join(f"{{:<{w}}}" for w in widths)
	lines = [fmt.format(*headers), "-+-".join("-" * w for w in widths)]
	lines.extend(fmt.format(*row) for row in rows)
	return lines


def _parse_int(s: str) -> Optional[int]:
	"""Accept numeric inputs like "1" or "1." and return int(1). Returns None if not valid."""
	s = (s or "").strip()
	if s.endswith("."):
		s = s[:-1]
	try:
		return int(s)
	except ValueError:
		return None


def _parse_float(s: str) -> Optional[float]:
	try:
		return float((s or "").strip())
	except ValueError:
		return None


def _fmt_avg(x: Optional[float]) -> str:
	"""Format averages to two decimals."""
	return "No Ratings" if x is None else f"{x:.2f}"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(description="Personal movie catalog")
	parser.add_argument("--file", default=str(config.CATALOG_FILE), help="catalog JSON file")
	parser.add_argument(
		"--mode",
		choices=[m.value for m in GenreMode],
		default=config.GENRE_MODE.value,
		help="genre classification: one free-text label or votes per genre",
	)
	parser.add_argument(
		"--log-level",
		type=str.upper,
		choices=config.LOG_LEVELS,
		default=config.LOG_LEVEL,
		help="loguru level for stderr output",
	)
	return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
	args = parse_args(argv)

	# Route loguru to stderr at the requested level so it does not clutter the menu
	logger.remove()
	logger.add(sys.stderr, level=args.log_level)

	store = CatalogStore(args.file, mode=GenreMode(args.mode))
	catalog = MovieCatalog(store)
	logger.info(f"[CLI] Starting menu | file={args.file} | mode={args.mode}")
	try:
		CatalogCLI(catalog).run()
	except (KeyboardInterrupt, EOFError):
		print("\nGoodbye!")


if __name__ == '__main__':
	main()
