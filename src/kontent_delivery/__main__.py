"""`python -m kontent_delivery` runs the CLI."""

from kontent_delivery.cli.main import run

if __name__ == "__main__":
    run()
