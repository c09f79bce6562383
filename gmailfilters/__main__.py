"""Entry point for `python -m gmailfilters`."""
from gmailfilters.cli.main import main

if __name__ == "__main__":
    raise SystemExit(main())
