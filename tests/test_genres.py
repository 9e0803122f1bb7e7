"""
Unit tests for genre resolution: exact names, synonyms, and fuzzy matches.
Run: python tests/test_genres.py
"""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from moviedb.genres import GENRES, empty_votes, genre_index, normalize_votes, resolve_genre


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def test_exact_names():
	assert_equal(resolve_genre("horror"), "Horror", "lowercase name")
	assert_equal(resolve_genre("  Science Fiction "), "Science Fiction", "padded multi-word name")


def test_synonyms():
	assert_equal(resolve_genre("sci-fi"), "Science Fiction", "synonym sci-fi -> Science Fiction")
	assert_equal(resolve_genre("funny"), "Comedy", "synonym funny -> Comedy")
	assert_equal(resolve_genre("sports"), "Sport", "plural synonym")


def test_fuzzy():
	assert_equal(resolve_genre("thriler"), "Thriller", "small typo")
	assert_equal(resolve_genre("cooking"), None, "unrelated word")
	assert_equal(resolve_genre(""), None, "empty input")


def test_genre_index():
	assert_equal(genre_index("drama"), GENRES.index("Drama"), "index of resolved genre")
	assert_equal(genre_index("nonsense words"), None, "unresolved text")


def test_vote_maps():
	assert_equal(empty_votes(), {g: 0 for g in GENRES}, "zero map over enumeration")
	votes = normalize_votes({"horror": 2, "Made Up": 5, "War": -1})
	assert_equal(votes["Horror"], 2, "label matched case-insensitively")
	assert_equal(votes["War"], 0, "negative count clamped")
	assert_equal(set(votes), set(GENRES), "unknown labels dropped, missing filled")


def main():
	print("Running genre tests...")
	tests = [obj for name, obj in sorted(globals().items()) if name.startswith('test_') and callable(obj)]
	for test in tests:
		test()
		print(f" - {test.__name__} ok")
	print("All genre tests passed!")


if __name__ == '__main__':
	main()
