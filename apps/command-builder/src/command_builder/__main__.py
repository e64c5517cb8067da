import sys

from .cli import main

# All catch-all handling lives in cli.main() so that both `python -m
# command_builder` and the installed `cb` script go through the same path.
if __name__ == "__main__":
    sys.exit(main())
