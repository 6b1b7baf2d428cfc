from dataclasses import dataclass
import enum
import logging
from typing import Iterable, Optional

from cuboid_reboot.cube import Cube
from cuboid_reboot.errors import ValidationError
from cuboid_reboot.segment import Segment
from cuboid_reboot.shape import Shape
from cuboid_reboot.shapestore import ShapeStore, _validate_shape_id

# CONSTANTS
DEFAULT_FOCUS_RADIUS = 50

# Set up logging
logger = logging.getLogger(__name__)


class OnOff(enum.Enum):
    ON = "on"
    OFF = "off"


@dataclass(frozen=True)
class Instruction:
    """A single reboot step: switch every cell of ``cube`` on or off."""

    state: OnOff
    cube: Cube

    def __post_init__(self):
        if not isinstance(self.state, OnOff):
            raise ValidationError(f"Instruction state must be OnOff, got {self.state!r}")
        if not isinstance(self.cube, Cube):
            raise ValidationError(f"Instruction cube must be a Cube, got {type(self.cube)}")

    @classmethod
    def on(cls, cube: Cube) -> "Instruction":
        return cls(OnOff.ON, cube)

    @classmethod
    def off(cls, cube: Cube) -> "Instruction":
        return cls(OnOff.OFF, cube)

    @property
    def is_on(self) -> bool:
        return self.state is OnOff.ON

    def clipped(self, focus: Cube) -> Optional["Instruction"]:
        """This instruction restricted to ``focus``, or None if nothing is left."""
        cube = self.cube.overlapping(focus)
        if cube is None:
            return None
        return Instruction(self.state, cube)

    def to_json(self) -> dict:
        return {'state': self.state.value, 'cube': self.cube.to_dict()}

    @classmethod
    def from_json(cls, data: dict) -> "Instruction":
        return cls(OnOff(data['state']), Cube.from_dict(data['cube']))

    def __str__(self) -> str:
        c = self.cube
        return f"{self.state.value} x={c.x},y={c.y},z={c.z}"


def focus_cube(radius: int = DEFAULT_FOCUS_RADIUS) -> Cube:
    """The cube ``[-radius, radius]`` on every axis."""
    if isinstance(radius, bool) or not isinstance(radius, int) or radius < 0:
        raise ValidationError(f"Focus radius must be a non-negative integer, got {radius!r}")
    segment = Segment.from_ends(-radius, radius)
    return Cube(segment, segment, segment)


def _validate_focus(focus) -> None:
    if focus is not None and not isinstance(focus, Cube):
        raise ValidationError(f"focus must be a Cube or None, got {type(focus)}")

def _validate_store(store, shape_id) -> None:
    if store is None:
        return
    if not isinstance(store, ShapeStore):
        raise ValidationError(f"store must be a ShapeStore, got {type(store)}")
    if shape_id is None:
        raise ValidationError("shape_id is required when a store is given")
    _validate_shape_id(shape_id)


class RebootEngine:
    """Folds an ordered stream of reboot instructions into a Shape.

    The engine owns its Shape for its whole lifetime. Instructions are
    applied strictly in order since later steps override earlier ones where
    they overlap.

    Example:
        engine = RebootEngine(focus=focus_cube(50))
        engine.run(instructions)
        print(engine.volume)
    """

    def __init__(self,
                 focus: Optional[Cube] = None,
                 compact: bool = False,
                 store=None,
                 shape_id: Optional[str] = None):
        """Initialize an engine with an empty shape.

        Args:
            focus: Optional clip region. Each instruction's cube is intersected
                   with it first, and instructions that fall entirely outside
                   are dropped.
            compact: Merge adjacent members after every instruction. This only
                     keeps the member list short; volumes are unaffected.
            store: Optional ShapeStore. When given, ``run`` saves the final
                   shape under ``shape_id``.
            shape_id: Identifier used with ``store``.

        Raises:
            ValidationError: If an argument has the wrong type
            ShapeStoreError: If ``shape_id`` is not a valid store key
        """
        _validate_focus(focus)
        _validate_store(store, shape_id)
        self._focus = focus
        self._compact = bool(compact)
        self._store = store
        self._shape_id = None if shape_id is None else str(shape_id)
        self._shape = Shape()
        self._applied = 0
        self._dropped = 0

    @property
    def focus(self) -> Optional[Cube]:
        return self._focus

    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def volume(self) -> int:
        return self._shape.volume()

    @property
    def applied(self) -> int:
        """Number of instructions applied to the shape."""
        return self._applied

    @property
    def dropped(self) -> int:
        """Number of instructions dropped by the focus clip."""
        return self._dropped

    def apply(self, instruction: Instruction) -> None:
        """Apply one instruction to the shape."""
        if not isinstance(instruction, Instruction):
            raise ValidationError(f"Expected an Instruction, got {type(instruction)}")
        if self._focus is not None:
            clipped = instruction.clipped(self._focus)
            if clipped is None:
                logger.debug(f"Dropping {instruction}: outside focus {self._focus}")
                self._dropped += 1
                return
            instruction = clipped

        if instruction.is_on:
            self._shape.add(instruction.cube)
        else:
            self._shape.subtract(instruction.cube)
        if self._compact:
            self._shape.compact()
        self._applied += 1

    def run(self, instructions: Iterable[Instruction]) -> int:
        """Apply every instruction in order and return the resulting volume."""
        for instruction in instructions:
            self.apply(instruction)
        volume = self.volume
        logger.info(f"Applied {self._applied} instruction(s), dropped {self._dropped}: "
                    f"{len(self._shape)} cube(s), volume {volume}")
        if self._store is not None:
            self._store.save_shape(self._shape_id, self._shape, meta=self.to_json())
        return volume

    def to_json(self) -> dict:
        return {
            'focus': self._focus.to_dict() if self._focus is not None else None,
            'compact': self._compact,
            'applied': self._applied,
            'dropped': self._dropped,
            'volume': self.volume,
        }


def run_steps(instructions: Iterable[Instruction],
              focus: Optional[Cube] = None,
              compact: bool = False) -> int:
    """Fold ``instructions`` into a fresh shape and return its volume."""
    return RebootEngine(focus=focus, compact=compact).run(instructions)

def initialization_volume(instructions: Iterable[Instruction],
                          radius: int = DEFAULT_FOCUS_RADIUS) -> int:
    """Volume left on inside the ``[-radius, radius]`` initialization region."""
    return run_steps(instructions, focus=focus_cube(radius))

def reboot_volume(instructions: Iterable[Instruction]) -> int:
    """Volume left on after the full, unclipped reboot."""
    return run_steps(instructions)
