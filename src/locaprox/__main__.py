"""Module entry point for python -m locaprox."""

from __future__ import annotations

from locaprox.app import main


if __name__ == "__main__":
    raise SystemExit(main())
