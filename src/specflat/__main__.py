"""Allow ``python -m specflat``."""

from specflat.app import main

if __name__ == "__main__":
    main()
