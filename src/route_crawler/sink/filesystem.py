"""Artifact sink writing capture bundles to a directory tree."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from ..core.artifacts import CaptureBundle
from ..core.errors import SinkError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FilesystemSink:
    """Stores ``<key>.png``, ``<key>.html`` and ``<key>.media.json`` under ``root``.

    Keys use ``/`` as separator; the last segment is the file stem and the
    ones before it are directories.
    """

    root: Path

    def resolve(self, key_path: str) -> Path:
        parts = [part for part in PurePosixPath(key_path).parts if part not in {"", "/", ".", ".."}]
        if not parts:
            raise SinkError(key_path, "empty key")
        return self.root.joinpath(*parts)

    def ensure_path(self, key_path: str) -> None:
        directory = self.resolve(key_path)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SinkError(key_path, f"cannot create {directory}: {exc}") from exc

    def store(self, key_path: str, bundle: CaptureBundle) -> str:
        target = self.resolve(key_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if bundle.screenshot is not None:
                target.with_name(target.name + ".png").write_bytes(bundle.screenshot)
            if bundle.html is not None:
                target.with_name(target.name + ".html").write_text(bundle.html, encoding="utf-8")
            if bundle.media_urls:
                target.with_name(target.name + ".media.json").write_text(
                    json.dumps(list(bundle.media_urls), indent=4), encoding="utf-8"
                )
        except OSError as exc:
            raise SinkError(key_path, str(exc)) from exc

        logger.debug("Stored %s under %s", key_path, target.parent)
        return str(target)
