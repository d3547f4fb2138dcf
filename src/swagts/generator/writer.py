"""Write rendered files to disk.

Each :class:`~swagts.models.GeneratedFile` is written atomically
(:func:`_atomic_write`) so an interrupted run never leaves a half-written
source file behind.  Parent directories are created on demand, which means
the definition and operation directories only appear when they receive at
least one file.
"""

from __future__ import annotations

import contextlib
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional

from swagts.exceptions import OutputError
from swagts.models import GeneratedFile
from swagts.output import info


def write_files(files: list[GeneratedFile], base_dir: Optional[Path] = None) -> list[Path]:
    """Write *files* and report each one on stderr as ``Generate: <path>``.

    Args:
        files: Rendered files, typically from
            :func:`~swagts.generator.renderer.render_files`.
        base_dir: Directory that relative file paths are resolved against.
            Defaults to the current working directory.

    Returns:
        The absolute paths written, in order.

    Raises:
        OutputError: If a directory cannot be created or a file cannot be
            written.
    """
    base = base_dir if base_dir is not None else Path.cwd()
    written: list[Path] = []

    for generated in files:
        target = generated.path if generated.path.is_absolute() else base / generated.path
        target = target.resolve()
        info(f"Generate: {target}")
        try:
            _atomic_write(target, generated.content)
        except OSError as exc:
            raise OutputError(f"Cannot write {target}: {exc}") from exc
        written.append(target)

    return written


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* through a temp file in the same directory.

    The temp file is created private (``0600``), so it is given the mode an
    ordinary ``open()`` would have produced before it is renamed into place:
    the existing file's mode when *path* is overwritten, ``0666`` minus the
    umask otherwise.  A failed write removes the temp file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _target_mode(path)

    handle = tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
        encoding="utf-8",
    )
    tmp_path = handle.name
    try:
        with handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        pass
    # os.umask can only be read by setting it.
    umask = os.umask(0o022)
    os.umask(umask)
    return 0o666 & ~umask
