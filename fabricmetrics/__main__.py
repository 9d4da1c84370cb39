"""Module entrypoint for ``python -m fabricmetrics``."""

from fabricmetrics.cli import main

if __name__ == "__main__":
    main()
