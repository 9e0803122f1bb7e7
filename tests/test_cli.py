"""
Scripted-session tests for the console menu and the bulk import script.
Run: python tests/test_cli.py
"""

import sys
import tempfile
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from cli import CatalogCLI, parse_args, render_table
from moviedb.catalog import MovieCatalog
from moviedb.genres import GENRES
from moviedb.models import GenreMode
from moviedb.storage import CatalogStore
from scripts.import_movies import import_movies


def run_session(catalog: MovieCatalog, answers):
	"""Drive the menu with canned answers; returns everything it printed."""
	feed = iter(answers)
	printed = []
	CatalogCLI(catalog, input_fn=lambda prompt: next(feed), output_fn=printed.append).run()
	return printed


def assert_true(cond, msg):
	if not cond:
		raise AssertionError(msg)


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def test_add_rate_and_average_session():
	with tempfile.TemporaryDirectory() as tmp:
		catalog = MovieCatalog(CatalogStore(Path(tmp) / 'movies.json'))
		out = run_session(catalog, [
			"1", "Inception", "Nolan", "2010", "Science Fiction",
			"1", "inception", "Nolan", "2010", "Drama",
			"2", "1", "4",
			"2", "1", "5",
			"2", "1", "six",
			"3", "1",
			"11",
		])
		assert_true("Movie Added Successfully! (ID: 1)\n" in out, "add reported with id")
		assert_true("Movie already exists in the database!" in out, "duplicate reported")
		assert_true("Rating added successfully! Current average: 4.50" in out, "average after two ratings")
		assert_true(any(line.startswith("Invalid rating!") for line in out), "non-numeric rating reported")
		assert_true("Average Rating: 4.50\n" in out, "average shown to two decimals")
		assert_equal(out[-1], "Goodbye!", "exit")


def test_lookups_and_remove_session():
	with tempfile.TemporaryDirectory() as tmp:
		catalog = MovieCatalog(CatalogStore(Path(tmp) / 'movies.json'))
		catalog.add("Heat", "Michael Mann", 1995, "Crime")
		out = run_session(catalog, [
			"3", "abc",
			"8", "99",
			"6", "michael mann",
			"5", "Comedy",
			"9", "1",
			"10",
			"42",
			"11",
		])
		assert_true("Invalid ID! Please enter a whole number." in out, "bad id input")
		assert_true("Movie not found! Use option 10 to list movies with IDs." in out, "unknown id")
		assert_true(any("Heat" in line and "Michael Mann" in line for line in out), "director table row")
		assert_true("No movies found!" in out, "empty genre result and empty list after remove")
		assert_true("Movie removed successfully!\n" in out, "remove reported")
		assert_true("Invalid choice! Try again." in out, "unknown menu choice")
		assert_equal(len(catalog), 0, "movie removed")


def test_voted_mode_session():
	with tempfile.TemporaryDirectory() as tmp:
		catalog = MovieCatalog(CatalogStore(Path(tmp) / 'movies.json', mode=GenreMode.VOTED))
		catalog.add("Alien", "Scott", 1979)
		out = run_session(catalog, [
			"11", "alien", str(GENRES.index("Horror") + 1),
			"11", "Alien", "sci-fi",
			"11", "Alien", "sci-fi",
			"11", "Alien", "0",
			"12", "ALIEN",
			"12", "Alein",
			"13",
		])
		assert_true("Vote recorded for Horror!" in out, "vote by number")
		assert_true("Vote recorded for Science Fiction!" in out, "vote by synonym")
		assert_true("Invalid genre choice!" in out, "choice 0 rejected")
		assert_true("Top Genre: Science Fiction" in out, "top genre")
		assert_true("Did you mean: Alien?" in out, "suggestion for misspelled title")


def test_save_failure_reports_new_id():
	with tempfile.TemporaryDirectory() as tmp:
		blocker = Path(tmp) / 'blocker'
		blocker.write_text('x')
		catalog = MovieCatalog(CatalogStore(blocker / 'movies.json'))
		out = run_session(catalog, ["1", "Heat", "Mann", "1995", "Crime", "11"])
		assert_true(any(line.startswith("Warning: Could not save catalog") for line in out), "save failure reported")
		assert_true("Movie kept for this session but not saved yet. (ID: 1)" in out, "id of unsaved movie shown")
		assert_equal(out[-1], "Goodbye!", "menu keeps running")


def test_log_level_flag_validated():
	assert_equal(parse_args(["--log-level", "debug"]).log_level, "DEBUG", "level upper-cased")
	try:
		parse_args(["--log-level", "LOUD"])
	except SystemExit:
		return
	raise AssertionError("unknown log level should be rejected by argparse")


def test_render_table():
	lines = render_table(["ID", "Title"], [["1", "Heat"], ["22", "Up"]])
	assert_equal(lines[0], "ID | Title", "header")
	assert_equal(lines[1], "---+------", "rule")
	assert_equal(lines[3], "22 | Up   ", "padded row")


def test_import_movies_tally():
	entries = [
		{"title": "Heat", "director": "Mann", "release_year": 1995, "genre": "Crime"},
		{"title": "heat", "director": "Mann", "release_year": 1995, "genre": "Crime"},
		{"title": "", "director": "Nobody", "release_year": 0, "genre": ""},
		{"title": "Up", "director": "Docter", "release_year": 2009, "genre": "Animation"},
	]
	with tempfile.TemporaryDirectory() as tmp:
		catalog = MovieCatalog(CatalogStore(Path(tmp) / 'movies.json'))
		tally = import_movies(catalog, entries)
		assert_equal(tally['added'], 2, "added count")
		assert_equal(tally['already_exists'], 1, "duplicate count")
		assert_equal(tally['invalid_title'], 1, "invalid count")
		assert_equal([m.title for m in catalog.movies], ["Heat", "Up"], "catalog contents")


def main():
	print("Running CLI tests...")
	tests = [obj for name, obj in sorted(globals().items()) if name.startswith('test_') and callable(obj)]
	for test in tests:
		test()
		print(f" - {test.__name__} ok")
	print("All CLI tests passed!")


if __name__ == '__main__':
	main()
