"""HDF5-based persistent shape storage implementation.

Each shape lives in its own group ``shapes/<shape_id>`` holding an ``int64``
dataset ``cubes`` of shape ``(n, 6)`` (columns ``x0, x1, y0, y1, z0, z1``)
and its metadata as a JSON attribute.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

import numpy as np

from cuboid_reboot.errors import ShapeStoreError
from cuboid_reboot.shape import Shape
from cuboid_reboot.shapestore import ShapeStore, _require_writable, _validate_shape_id

try:
    import h5py
    HAS_H5PY = True
except ImportError:
    HAS_H5PY = False
    h5py = None

logger = logging.getLogger(__name__)


class HDF5ShapeStore(ShapeStore):
    """HDF5-based persistent shape storage implementation.

    All snapshots are persisted to disk and can be recovered across sessions.

    Args:
        filepath: Path to HDF5 file (created if doesn't exist)
        mode: File mode ('r' for read-only, 'a' for read/write, 'w' to truncate)
        compression: Compression algorithm for cube datasets ('gzip', 'lzf', None)
        compression_opts: Compression level (0-9 for gzip)

    Example:
        >>> with HDF5ShapeStore("runs/reboot.h5") as store:
        ...     engine = RebootEngine(store=store, shape_id="full")
        ...     engine.run(instructions)
    """

    def __init__(
        self,
        filepath: str | Path,
        mode: str = "a",
        compression: str | None = "gzip",
        compression_opts: int | None = 4,
    ):
        """Initialize HDF5 shape store.

        Raises:
            ImportError: If h5py is not installed
            ShapeStoreError: If ``mode`` is not one of 'r', 'a', 'w'
        """
        if not HAS_H5PY:
            raise ImportError(
                "h5py is required for HDF5ShapeStore. "
                "Install it with: pip install cuboid-reboot[hdf5]"
            )
        if mode not in ('r', 'a', 'w'):
            raise ShapeStoreError(f"mode must be 'r', 'a' or 'w', got {mode!r}")
        super().__init__()
        self.filepath = Path(filepath)
        self.compression = compression
        self.compression_opts = compression_opts if compression == "gzip" else None

        # 'w' truncates once, then behaves as 'a'
        if mode == 'w':
            with h5py.File(self.filepath, 'w') as f:
                f.create_group("shapes")
            self.mode = 'a'
        else:
            self.mode = mode

        # Single file handle reused across operations (single-threaded usage)
        self._file: Optional["h5py.File"] = None

        if self.mode != 'r':
            self._ensure_file_exists()

        self._open_file()

    def _ensure_file_exists(self) -> None:
        """Create file and root structure if it doesn't exist."""
        with h5py.File(self.filepath, "a") as f:
            if "shapes" not in f:
                f.create_group("shapes")

    def _open_file(self) -> None:
        if self._file is None:
            self._file = h5py.File(self.filepath, self.mode)

    def _get_file(self):
        if self._file is None:
            raise ShapeStoreError("HDF5ShapeStore file handle is closed")
        return self._file

    def close(self) -> None:
        """Close the file handle. Call when done with the store."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def flush(self) -> None:
        if self._file is not None:
            self._file.flush()

    def __enter__(self):
        self._open_file()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _get_shape_group(self, shape_id: str):
        f = self._get_file()
        path = f"shapes/{shape_id}"
        if path in f:
            return f[path]
        return None

    def save_shape(self, shape_id: str, shape, meta: Optional[dict] = None) -> None:
        """Write ``shape`` and ``meta`` to disk, replacing any previous snapshot.

        Raises:
            ShapeStoreError: If the store was opened read-only or the id is invalid
        """
        _require_writable(self.mode)
        sid = _validate_shape_id(shape_id)
        f = self._get_file()
        path = f"shapes/{sid}"
        if path in f:
            del f[path]
        group = f.create_group(path)

        cubes = shape.to_array()
        dataset_kwargs = {}
        # Compression filters need a chunked, non-empty dataset
        if self.compression is not None and len(cubes):
            dataset_kwargs["compression"] = self.compression
            if self.compression_opts is not None:
                dataset_kwargs["compression_opts"] = self.compression_opts
        group.create_dataset("cubes", data=cubes, dtype=np.int64, **dataset_kwargs)
        group.attrs["meta"] = json.dumps(meta or {})
        f.flush()
        logger.debug(f"Saved shape {sid} with {len(cubes)} cube(s) to {self.filepath}")

    def load_shape(self, shape_id: str) -> Shape:
        sid = _validate_shape_id(shape_id)
        group = self._get_shape_group(sid)
        if group is None:
            raise KeyError(f"Shape {sid} not found")
        return Shape.from_array(group["cubes"][:], validate=False)

    def get_shape_meta(self, shape_id: str) -> dict:
        sid = _validate_shape_id(shape_id)
        group = self._get_shape_group(sid)
        if group is None:
            raise KeyError(f"Shape {sid} not found")
        meta_json = group.attrs.get("meta")
        if meta_json is None:
            return {}
        return json.loads(meta_json)

    def delete_shape(self, shape_id: str) -> None:
        _require_writable(self.mode)
        sid = _validate_shape_id(shape_id)
        f = self._get_file()
        path = f"shapes/{sid}"
        if path in f:
            del f[path]
            f.flush()

    def iter_shape_ids(self) -> Iterable[str]:
        f = self._get_file()
        if "shapes" not in f:
            return []
        return list(f["shapes"].keys())
