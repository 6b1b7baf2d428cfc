"""Shared test fixtures and configuration for cuboid reboot tests."""

import pytest
import torch
import numpy as np

from cuboid_reboot import Cube, Instruction, Segment
from cuboid_reboot.shapestore import MemoryShapeStore


@pytest.fixture
def random_seed():
    """Ensure reproducible random results in tests."""
    torch.manual_seed(42)
    np.random.seed(42)
    yield


@pytest.fixture
def rng(random_seed):
    """Seeded numpy generator for random instruction streams."""
    return np.random.default_rng(42)


@pytest.fixture
def small_cube():
    """The cube [10..12]^3 (27 cells)."""
    return Cube.from_ends(10, 12, 10, 12, 10, 12)


@pytest.fixture
def shifted_cube():
    """The cube [11..13]^3, overlapping small_cube in 8 cells."""
    return Cube.from_ends(11, 13, 11, 13, 11, 13)


@pytest.fixture
def example_instructions():
    """Four-step reboot leaving 39 cells on."""
    return [
        Instruction.on(Cube.from_ends(10, 12, 10, 12, 10, 12)),
        Instruction.on(Cube.from_ends(11, 13, 11, 13, 11, 13)),
        Instruction.off(Cube.from_ends(9, 11, 9, 11, 9, 11)),
        Instruction.on(Cube.from_ends(10, 10, 10, 10, 10, 10)),
    ]


@pytest.fixture
def example_text():
    """The same four steps as example_instructions, as text."""
    return (
        "on x=10..12,y=10..12,z=10..12\n"
        "on x=11..13,y=11..13,z=11..13\n"
        "off x=9..11,y=9..11,z=9..11\n"
        "on x=10..10,y=10..10,z=10..10\n"
    )


@pytest.fixture
def larger_text():
    """Reboot with steps partly outside the -50..50 region."""
    return "\n".join([
        "on x=-20..26,y=-36..17,z=-47..7",
        "on x=-20..33,y=-21..23,z=-26..28",
        "on x=-22..28,y=-29..23,z=-38..16",
        "on x=-46..7,y=-6..46,z=-50..-1",
        "on x=-49..1,y=-3..46,z=-24..28",
        "on x=2..47,y=-22..22,z=-23..27",
        "on x=-27..23,y=-28..26,z=-21..29",
        "on x=-39..5,y=-6..47,z=-3..44",
        "on x=-30..21,y=-8..43,z=-13..34",
        "on x=-22..26,y=-27..20,z=-29..19",
        "off x=-48..-32,y=26..41,z=-47..-37",
        "on x=-12..35,y=6..50,z=-50..-2",
        "off x=-48..-32,y=-32..-16,z=-15..-5",
        "on x=-18..26,y=-33..15,z=-7..46",
        "off x=-40..-22,y=-38..-28,z=23..41",
        "on x=-16..35,y=-41..10,z=-47..6",
        "off x=-32..-23,y=11..30,z=-14..3",
        "on x=-49..-5,y=-3..45,z=-29..18",
        "off x=18..30,y=-20..-8,z=-3..13",
        "on x=-41..9,y=-7..43,z=-33..15",
        "on x=-54112..-39298,y=-85059..-49293,z=-27449..7877",
        "on x=967..23432,y=45373..81175,z=27513..53682",
    ])


@pytest.fixture
def memory_store():
    """Shared in-memory shape store for tests."""
    return MemoryShapeStore()


def make_random_instructions(rng, count: int, low: int = -6, high: int = 6, max_len: int = 5):
    """Random on/off instructions confined to a small box."""
    instructions = []
    for _ in range(count):
        segments = []
        for _axis in range(3):
            start = int(rng.integers(low, high + 1))
            length = int(rng.integers(0, max_len + 1))
            segments.append(Segment(start, length))
        cube = Cube(*segments)
        if rng.random() < 0.6:
            instructions.append(Instruction.on(cube))
        else:
            instructions.append(Instruction.off(cube))
    return instructions


@pytest.fixture
def random_instructions(rng):
    """Factory fixture producing seeded random instruction streams."""
    def _make(count: int = 30, **kwargs):
        return make_random_instructions(rng, count, **kwargs)
    return _make
