"""Filesystem operations for payload discovery and staged output trees.

INVARIANT: The payload is read-only.  Every write goes into a staging
directory that is renamed over the output path only after the build
finished.  A failed build never leaves a half-written tree behind and
never loses the tree it was replacing.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path

from agentpack.domain.errors import PayloadIntegrityError, WriteError


class PathKind(Enum):
    """Result of an existence query.  Symlinks are followed."""

    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"
    ABSENT = "absent"

    @property
    def exists(self) -> bool:
        return self is not PathKind.ABSENT


def path_kind(path: Path) -> PathKind:
    """Classify *path* without raising for missing or unreadable entries."""
    try:
        st_path = path.resolve(strict=True)
    except (OSError, RuntimeError):
        # Dangling symlinks still occupy the name.
        return PathKind.OTHER if path.is_symlink() else PathKind.ABSENT
    if st_path.is_dir():
        return PathKind.DIRECTORY
    if st_path.is_file():
        return PathKind.FILE
    return PathKind.OTHER


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def list_markdown_files(directory: Path, suffix: str = ".md") -> list[Path]:
    """Return regular files directly inside *directory* ending in *suffix*.

    Non-recursive.  A missing directory yields an empty list.
    """
    if path_kind(directory) is not PathKind.DIRECTORY:
        return []
    try:
        entries = list(directory.iterdir())
    except OSError:
        return []
    return sorted(
        (p for p in entries if p.name.endswith(suffix) and path_kind(p) is PathKind.FILE),
        key=lambda p: p.name,
    )


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def copy_document(src: Path, dest: Path) -> None:
    """Copy *src* byte-for-byte to *dest*, creating parent directories.

    Raises PayloadIntegrityError if *src* is gone, WriteError for any other
    failure.
    """
    if path_kind(src) is not PathKind.FILE:
        msg = f"Payload file disappeared: {src}"
        raise PayloadIntegrityError(msg, path=str(src))
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dest)
    except FileNotFoundError as exc:
        if not src.exists():
            msg = f"Payload file disappeared: {src}"
            raise PayloadIntegrityError(msg, path=str(src)) from exc
        msg = f"Cannot write {dest}: {exc.strerror}"
        raise WriteError(msg, path=str(dest)) from exc
    except OSError as exc:
        msg = f"Cannot write {dest}: {exc.strerror or exc}"
        raise WriteError(msg, path=str(dest)) from exc


def write_text_file(path: Path, content: str) -> None:
    """Write *content* to *path*, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot write {path}: {exc.strerror or exc}"
        raise WriteError(msg, path=str(path)) from exc


def remove_tree(path: Path) -> None:
    """Recursively remove *path* (a directory, file, or symlink)."""
    try:
        if path.is_symlink() or not path.is_dir():
            path.unlink()
        else:
            shutil.rmtree(path)
    except OSError as exc:
        msg = f"Cannot remove {path}: {exc.strerror or exc}"
        raise WriteError(msg, path=str(path)) from exc


def list_tree(root: Path) -> list[str]:
    """Return POSIX-style relative paths of every file under *root*, sorted."""
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


@contextmanager
def staged_directory(target: Path, *, replace: bool) -> Generator[Path]:
    """Yield a fresh staging directory that becomes *target* on clean exit.

    The staging directory is a hidden sibling of *target*, so the final
    rename stays on one filesystem.  When *replace* is True an existing
    *target* is moved aside to ``.<name>.old.<suffix>``, the staging tree
    is renamed into place, and only then is the old tree removed.  If the
    body or the rename fails, the staging directory is removed and
    *target* keeps its previous contents.
    """
    parent = target.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=f".{target.name}.", dir=parent))
    except OSError as exc:
        msg = f"Cannot create output directory {parent}: {exc.strerror or exc}"
        raise WriteError(msg, path=str(parent)) from exc

    try:
        yield staging
        # mkdtemp creates 0700; match a normally created directory.
        umask = os.umask(0)
        os.umask(umask)
        try:
            staging.chmod(0o777 & ~umask)
        except OSError as exc:
            msg = f"Cannot set permissions on {staging}: {exc.strerror or exc}"
            raise WriteError(msg, path=str(staging)) from exc

        backup: Path | None = None
        if replace and path_kind(target).exists:
            backup = parent / f".{target.name}.old{staging.name.removeprefix(f'.{target.name}')}"
            try:
                target.rename(backup)
            except OSError as exc:
                msg = f"Cannot move {target} aside: {exc.strerror or exc}"
                raise WriteError(msg, path=str(target)) from exc

        try:
            staging.rename(target)
        except OSError as exc:
            msg = f"Cannot move build into {target}: {exc.strerror or exc}"
            if backup is not None:
                try:
                    os.replace(backup, target)
                except OSError:
                    msg += f" (previous contents kept at {backup})"
            raise WriteError(msg, path=str(target)) from exc

        if backup is not None:
            remove_tree(backup)
    except BaseException:
        if staging.exists():
            shutil.rmtree(staging, ignore_errors=True)
        raise
