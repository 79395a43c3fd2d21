import sys

from .Cli import main

if __name__ == "__main__":
    sys.exit(main())
