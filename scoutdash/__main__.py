"""Allow ``python -m scoutdash``."""

from scoutdash.main import main

if __name__ == "__main__":
    raise SystemExit(main())
