"""Entry point for ``python -m gradle_submit``."""

from .cli.main import main

if __name__ == "__main__":
    main()
