"""Allow ``python -m winbootstrap``."""

from winbootstrap.main import cli

if __name__ == "__main__":
    cli()
