"""Data loading, manifest validation, and SHA-256 checksum verification."""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Iterable
from importlib import resources
from pathlib import Path
from typing import Any

import msgpack

from ._errors import AnagroveChecksumError, AnagroveError, AnagroveVersionError

logger = logging.getLogger(__name__)

_EXPECTED_VERSION = "1.0"

_TEXT_SUFFIXES = (".tsv", ".txt")
_MSGPACK_SUFFIXES = (".bin", ".msgpack")


def _default_data_dir() -> Path:
    return Path(str(resources.files("anagrove") / "data"))


def _sha256(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


def _read_manifest(data_dir: Path) -> dict[str, Any]:
    manifest_path = data_dir / "manifest.json"
    if not manifest_path.exists():
        raise AnagroveError(f"manifest.json not found in {data_dir}")
    with open(manifest_path) as f:
        return json.load(f)


def _validate_manifest(manifest: dict[str, Any], data_dir: Path) -> Path:
    """Check version and checksums; return the dictionary file path."""
    version = manifest.get("version")
    if version != _EXPECTED_VERSION:
        raise AnagroveVersionError(
            f"Expected data version {_EXPECTED_VERSION!r}, got {version!r}"
        )
    filename = manifest.get("dictionary")
    if not filename:
        raise AnagroveError("Manifest does not name a dictionary file")
    filepath = data_dir / filename
    if not filepath.exists():
        raise AnagroveError(f"Missing data file: {filepath}")
    expected = manifest.get("files", {}).get(filename)
    if expected is None:
        raise AnagroveError(f"No checksum in manifest for {filename}")
    actual = _sha256(filepath)
    if actual != expected:
        raise AnagroveChecksumError(
            f"Checksum mismatch for {filename}: "
            f"expected {expected[:16]}..., got {actual[:16]}..."
        )
    return filepath


def _load_msgpack(path: Path, **kwargs: Any) -> Any:
    with open(path, "rb") as f:
        return msgpack.unpackb(f.read(), raw=False, **kwargs)


def _read_text_pairs(path: Path) -> list[tuple[str, int]]:
    """Read ``word<TAB>score`` lines; higher score means more common.

    Lines without a score rank after all scored lines, in file order.
    Blank lines and ``#`` comments are skipped.
    """
    keyed: list[tuple[tuple[int, int, str], str]] = []
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split("\t")
            word = parts[0]
            if len(parts) > 1 and parts[1].strip():
                try:
                    score = int(parts[1])
                except ValueError:
                    raise AnagroveError(
                        f"{path.name}:{lineno}: bad score {parts[1]!r}"
                    ) from None
                keyed.append(((0, -score, word), word))
            else:
                keyed.append(((1, lineno, word), word))
    keyed.sort(key=lambda kw: kw[0])
    return [(word, rank) for rank, (_, word) in enumerate(keyed, 1)]


def _read_msgpack_pairs(path: Path) -> list[tuple[str, int]]:
    raw = _load_msgpack(path)
    pairs: list[tuple[str, int]] = []
    for item in raw:
        if len(item) != 2:
            raise AnagroveError(f"{path.name}: malformed entry {item!r}")
        pairs.append((item[0], int(item[1])))
    return pairs


def load_data(data_dir: Path | str | None = None) -> dict[str, Any]:
    """Load and validate the dictionary, returning its raw (word, rank) pairs."""
    if data_dir is None:
        data_dir = _default_data_dir()
    else:
        data_dir = Path(data_dir)

    manifest = _read_manifest(data_dir)
    path = _validate_manifest(manifest, data_dir)

    suffix = path.suffix.lower()
    if suffix in _TEXT_SUFFIXES:
        pairs = _read_text_pairs(path)
    elif suffix in _MSGPACK_SUFFIXES:
        pairs = _read_msgpack_pairs(path)
    else:
        raise AnagroveError(f"Unsupported dictionary format: {path.name}")

    logger.debug("Loaded %d dictionary rows from %s", len(pairs), path)
    return {
        "pairs": pairs,
        "dictionary_file": path,
        "version": manifest["version"],
    }


def write_data(
    data_dir: Path | str,
    pairs: Iterable[tuple[str, int]],
    filename: str = "dictionary.bin",
) -> Path:
    """Write (word, rank) pairs as msgpack plus a checksummed manifest.

    Returns the data directory, which ``load_data`` accepts as-is.
    """
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / filename
    with open(path, "wb") as f:
        f.write(msgpack.packb([[w, int(r)] for w, r in pairs], use_bin_type=True))
    manifest = {
        "version": _EXPECTED_VERSION,
        "dictionary": filename,
        "files": {filename: _sha256(path)},
    }
    with open(data_dir / "manifest.json", "w") as f:
        json.dump(manifest, f, indent=2)
    return data_dir
