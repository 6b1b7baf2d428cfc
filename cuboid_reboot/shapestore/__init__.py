"""Storage backends for shape snapshots.

A shape store keeps named snapshots of Shapes together with a small metadata
dict, so the result of a long reboot can be kept and reloaded later.

The abstract ShapeStore interface allows for different storage strategies:
- MemoryShapeStore: In-memory storage (default)
- HDF5ShapeStore: Persistent HDF5-backed storage
"""

import abc
from typing import Dict, Iterable, Optional

import numpy as np

from cuboid_reboot.errors import ShapeStoreError
from cuboid_reboot.shape import Shape


class ShapeStore(abc.ABC):
    """Abstract base class for shape storage backends.

    Shapes are stored by value: saving copies the shape and loading returns
    a fresh Shape, so later mutations on either side never leak through.
    Shape ids are non-empty strings without '/'; every backend rejects
    other ids with ShapeStoreError.
    """

    @abc.abstractmethod
    def save_shape(self, shape_id: str, shape, meta: Optional[dict] = None) -> None:
        """Store ``shape`` under ``shape_id``, replacing any previous snapshot."""
        raise NotImplementedError

    @abc.abstractmethod
    def load_shape(self, shape_id: str):
        """Return the stored shape. Raises a KeyError if the shape is not found."""
        raise NotImplementedError

    @abc.abstractmethod
    def get_shape_meta(self, shape_id: str) -> dict:
        """Fetch the metadata dict stored with a shape."""
        raise NotImplementedError

    @abc.abstractmethod
    def delete_shape(self, shape_id: str) -> None:
        """Remove a shape and its metadata. Unknown ids are ignored."""
        raise NotImplementedError

    @abc.abstractmethod
    def iter_shape_ids(self) -> Iterable[str]:
        raise NotImplementedError

    def has_shape(self, shape_id: str) -> bool:
        return str(shape_id) in set(self.iter_shape_ids())


class MemoryShapeStore(ShapeStore):
    """In-memory shape storage implementation.

    Keeps each snapshot as an ``int64`` cube array in a dictionary.
    """
    def __init__(self):
        """Initialize an empty in-memory shape store."""
        super().__init__()
        self._arrays: Dict[str, np.ndarray] = {}
        self._meta: Dict[str, dict] = {}

    def save_shape(self, shape_id: str, shape, meta: Optional[dict] = None) -> None:
        sid = _validate_shape_id(shape_id)
        self._arrays[sid] = shape.to_array()
        self._meta[sid] = dict(meta or {})

    def load_shape(self, shape_id: str):
        sid = _validate_shape_id(shape_id)
        if sid not in self._arrays:
            raise KeyError(f"Shape {sid} not found")
        return Shape.from_array(self._arrays[sid], validate=False)

    def get_shape_meta(self, shape_id: str) -> dict:
        sid = _validate_shape_id(shape_id)
        if sid not in self._meta:
            raise KeyError(f"Shape {sid} not found")
        return dict(self._meta[sid])

    def delete_shape(self, shape_id: str) -> None:
        sid = _validate_shape_id(shape_id)
        self._arrays.pop(sid, None)
        self._meta.pop(sid, None)

    def iter_shape_ids(self) -> Iterable[str]:
        return list(self._arrays.keys())


def _require_writable(mode: str) -> None:
    if mode == 'r':
        raise ShapeStoreError("Shape store is read-only")


def _validate_shape_id(shape_id) -> str:
    """Return ``shape_id`` as a string usable as a single store key.

    Raises:
        ShapeStoreError: If the id is empty or contains '/'
    """
    sid = str(shape_id)
    if not sid or "/" in sid:
        raise ShapeStoreError(f"Shape id must be non-empty and must not contain '/', got {sid!r}")
    return sid


from cuboid_reboot.shapestore.hdf5_shapestore import HDF5ShapeStore, HAS_H5PY  # noqa: E402

__all__ = ["ShapeStore", "MemoryShapeStore", "HDF5ShapeStore", "HAS_H5PY"]
