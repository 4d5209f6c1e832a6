"""Main entry point for the siteindex CLI."""

from siteindex.cli import main

if __name__ == "__main__":
    main()
