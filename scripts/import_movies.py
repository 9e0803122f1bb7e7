"""
Bulk-import movies into the catalog.

This script:
1) Reads movies from a JSON Lines file (one object per line)
2) Opens the catalog file (creating it if missing)
3) Adds each movie through the catalog, skipping duplicates
4) Reports how many were added, duplicated, or invalid

Usage:
    python -m scripts.import_movies data/movies.jsonl [--file movies.json] [--mode single|voted]
"""

import argparse  # command-line flags
from collections import Counter  # tally outcomes

from loguru import logger  # console logging

from moviedb import config  # environment-driven defaults
from moviedb.catalog import MovieCatalog  # catalog engine
from moviedb.models import ErrorKind, GenreMode  # outcome kinds and genre mode
from moviedb.storage import CatalogStore, load_movies_from_jsonl  # persistence helpers


def import_movies(catalog: MovieCatalog, entries) -> Counter:
	"""Add every entry to the catalog; returns a tally keyed by 'added' or ErrorKind value."""
	tally: Counter = Counter()
	for entry in entries:
		result = catalog.add(entry['title'], entry['director'], entry['release_year'], entry['genre'])
		if result.ok:
			tally['added'] += 1
		else:
			tally[result.error.value] += 1
			if result.error is ErrorKind.ALREADY_EXISTS:
				logger.debug(f"[Import] Duplicate skipped: '{entry['title']}'")
	return tally


def main(argv=None):
	parser = argparse.ArgumentParser(description="Import movies from a JSON Lines file")
	parser.add_argument("source", help="JSONL file with title/director/year/genre per line")
	parser.add_argument("--file", default=str(config.CATALOG_FILE), help="catalog JSON file")
	parser.add_argument("--mode", choices=[m.value for m in GenreMode], default=config.GENRE_MODE.value)
	args = parser.parse_args(argv)

	logger.info("=" * 60)
	logger.info("Import Movies")
	logger.info("=" * 60)

	# 1) Read source entries
	logger.info(f"[1/3] Reading {args.source}...")
	entries = load_movies_from_jsonl(args.source)
	logger.info(f"[OK] Read {len(entries)} entries")

	# 2) Open catalog
	logger.info(f"\n[2/3] Opening catalog {args.file} ({args.mode} mode)...")
	catalog = MovieCatalog(CatalogStore(args.file, mode=GenreMode(args.mode)))
	logger.info(f"[OK] Catalog holds {len(catalog)} movies")

	# 3) Import
	logger.info("\n[3/3] Adding movies...")
	tally = import_movies(catalog, entries)
	logger.info(
		f"[OK] added={tally['added']} | duplicates={tally[ErrorKind.ALREADY_EXISTS.value]} | invalid={tally[ErrorKind.INVALID_TITLE.value]}"
	)
	logger.info(f"\nAll done! Catalog now holds {len(catalog)} movies.")
	logger.info("=" * 60)
	return tally


if __name__ == '__main__':
	main()  # invoke importer
