"""Allow ``python -m bimatch``."""

from bimatch.cli import main

if __name__ == "__main__":
    main()
