"""Allow running podunit with ``python -m podunit``."""

from podunit.cli.main import main


if __name__ == "__main__":
    main()
