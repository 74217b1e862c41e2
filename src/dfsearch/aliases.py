DESCRIPTION_TEXT = "dfsearch: find byte-identical regular files under a directory tree"

WORKERS_HELP_TEXT = (
    "Number of size buckets hashed concurrently.\n"
    "  1 (default) hashes sequentially, in ascending size order"
)

VERIFY_HELP_TEXT = (
    "Compare the members of every matching group byte by byte before reporting.\n"
    "Costs one more full read per file; rules out digest collisions"
)

TIMEOUT_HELP_TEXT = (
    "Stop hashing after this long (e.g. 30, 90s, 5m, 1h) and report partial results"
)

EPILOG_TEXT = """
Examples:
  Search the current directory
  %(prog)s

  Search a directory with 4 hashing workers
  %(prog)s ~/Downloads --workers 4

  Double-check every group byte by byte, give up after 10 minutes
  %(prog)s ~/Photos --verify --timeout 10m

  Machine-readable output
  %(prog)s ~/Downloads --json > report.json
"""
