"""Allow ``python -m dockter``."""

from dockter.cli import main

if __name__ == "__main__":
    main()
