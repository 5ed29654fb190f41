"""Allow ``python -m xsspage``."""

from xsspage.cli.main import cli

if __name__ == "__main__":
    cli()
