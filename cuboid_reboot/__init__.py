from .segment import Segment, Overlap
from .cube import Cube
from .shape import Shape
from .engine import (
    Instruction,
    OnOff,
    RebootEngine,
    focus_cube,
    initialization_volume,
    reboot_volume,
    run_steps,
)
from .errors import (
    ParseError,
    RebootError,
    SegmentOverflowError,
    ShapeStoreError,
    ValidationError,
    VolumeOverflowError,
)
from .parsing import load_instructions, parse_instruction, parse_instructions
from .shapestore import MemoryShapeStore, ShapeStore
from importlib.metadata import PackageNotFoundError, version

# Optional HDF5 support
from .shapestore.hdf5_shapestore import HDF5ShapeStore, HAS_H5PY

try:
    __version__ = version("cuboid-reboot")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    'Segment',
    'Overlap',
    'Cube',
    'Shape',
    'Instruction',
    'OnOff',
    'RebootEngine',
    'focus_cube',
    'initialization_volume',
    'reboot_volume',
    'run_steps',
    'parse_instruction',
    'parse_instructions',
    'load_instructions',
    'ShapeStore',
    'MemoryShapeStore',
    'RebootError',
    'ValidationError',
    'SegmentOverflowError',
    'VolumeOverflowError',
    'ParseError',
    'ShapeStoreError',
]

if HAS_H5PY:
    __all__.append('HDF5ShapeStore')
