"""Command-line interface."""
from beadcrafter.main import main


if __name__ == "__main__":
    main()
