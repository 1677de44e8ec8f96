"""``python -m lib_tag_merge`` runs the tag inspection CLI (``parse-tag``, ``resolve``)."""

from __future__ import annotations

from .cli import main


if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main())
