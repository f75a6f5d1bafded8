"""Allow ``python -m oneinch`` invocation."""

from oneinch.cli import cli

if __name__ == "__main__":
    cli()
