"""Allow running stashd as ``python -m stashd``."""

from stashd.cli import run

if __name__ == "__main__":
    run()
