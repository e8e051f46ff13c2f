"""Allow ``python -m catalog_sync``."""

from catalog_sync.main import run

if __name__ == "__main__":
    raise SystemExit(run())
