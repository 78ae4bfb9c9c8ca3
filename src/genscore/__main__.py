"""Entry point for ``python -m genscore``."""

from __future__ import annotations


def main() -> int:
    """Run the genscore CLI."""
    from genscore.cli import main as cli_main

    return cli_main()


if __name__ == "__main__":
    raise SystemExit(main())
