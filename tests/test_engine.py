"""Tests for the reboot engine."""

import itertools

import pytest

from cuboid_reboot import (
    Cube,
    Instruction,
    OnOff,
    RebootEngine,
    focus_cube,
    initialization_volume,
    parse_instructions,
    reboot_volume,
    run_steps,
)
from cuboid_reboot.dense import DenseGrid
from cuboid_reboot.errors import ValidationError


class TestInstruction:
    """Test the instruction value type."""

    def test_constructors(self, small_cube):
        assert Instruction.on(small_cube) == Instruction(OnOff.ON, small_cube)
        assert Instruction.off(small_cube).state is OnOff.OFF
        assert Instruction.on(small_cube).is_on
        assert not Instruction.off(small_cube).is_on

    def test_validation(self, small_cube):
        with pytest.raises(ValidationError):
            Instruction("on", small_cube)
        with pytest.raises(ValidationError):
            Instruction(OnOff.ON, (10, 12))

    def test_clipped(self, small_cube):
        step = Instruction.off(small_cube)
        clipped = step.clipped(Cube.from_ends(0, 10, 0, 10, 0, 10))
        assert clipped == Instruction.off(Cube.from_ends(10, 10, 10, 10, 10, 10))
        assert step.clipped(Cube.from_ends(0, 1, 0, 1, 0, 1)) is None

    def test_str_and_json(self, small_cube):
        step = Instruction.on(small_cube)
        assert str(step) == "on x=10..12,y=10..12,z=10..12"
        assert Instruction.from_json(step.to_json()) == step


class TestRebootEngine:
    """Test folding instruction streams."""

    def test_example_sequence(self, example_instructions):
        assert run_steps(example_instructions) == 39

    def test_example_matches_brute_force(self, example_instructions):
        grid = DenseGrid.from_instructions(example_instructions, bounds=Cube.from_ends(8, 14, 8, 14, 8, 14))
        assert grid.count() == run_steps(example_instructions)

    def test_off_on_empty_is_noop(self, small_cube):
        assert run_steps([Instruction.off(small_cube)]) == 0

    def test_empty_stream(self):
        assert run_steps([]) == 0

    def test_idempotent_off(self, example_instructions):
        cut = Instruction.off(Cube.from_ends(11, 12, 9, 11, 10, 13))
        once = run_steps(example_instructions + [cut])
        twice = run_steps(example_instructions + [cut, cut])
        assert once == twice

    def test_pure_on_volume_is_commutative(self, random_instructions):
        cubes = [step.cube for step in random_instructions(6)]
        volumes = {
            run_steps(Instruction.on(c) for c in order)
            for order in itertools.permutations(cubes)
        }
        assert len(volumes) == 1

    def test_mixed_sequences_depend_on_order(self, small_cube):
        on, off = Instruction.on(small_cube), Instruction.off(small_cube)
        assert run_steps([on, off]) == 0
        assert run_steps([off, on]) == 27

    def test_random_streams_match_brute_force(self, random_instructions):
        for _ in range(10):
            instructions = random_instructions(25)
            grid = DenseGrid.from_instructions(instructions)
            engine = RebootEngine()
            for step in instructions:
                engine.apply(step)
                assert engine.shape.is_disjoint()
            assert engine.volume == grid.count()

    def test_compaction_keeps_volume(self, random_instructions):
        instructions = random_instructions(40)
        plain = RebootEngine()
        compact = RebootEngine(compact=True)
        assert plain.run(instructions) == compact.run(instructions)
        assert len(compact.shape) <= len(plain.shape)

    def test_apply_requires_instruction(self, small_cube):
        with pytest.raises(ValidationError):
            RebootEngine().apply(small_cube)

    def test_counters(self, example_instructions):
        engine = RebootEngine(focus=Cube.from_ends(0, 10, 0, 10, 0, 10))
        engine.run(example_instructions)
        # the second step lies entirely beyond x = 10
        assert engine.applied == 3
        assert engine.dropped == 1
        # only the final single cell at (10, 10, 10) is left on
        assert engine.volume == 1

    def test_to_json(self, example_instructions):
        engine = RebootEngine()
        engine.run(example_instructions)
        meta = engine.to_json()
        assert meta['volume'] == 39
        assert meta['applied'] == 4
        assert meta['focus'] is None


class TestFocusedReboot:
    """Test the clipped initialization variant."""

    def test_focus_cube(self):
        assert focus_cube(50) == Cube.from_ends(-50, 50, -50, 50, -50, 50)
        assert focus_cube(0).volume() == 1

    @pytest.mark.parametrize("radius", [-1, 2.5, True])
    def test_focus_cube_validation(self, radius):
        with pytest.raises(ValidationError):
            focus_cube(radius)

    def test_focus_must_be_cube(self):
        with pytest.raises(ValidationError):
            RebootEngine(focus=50)

    def test_steps_outside_focus_are_dropped(self):
        far = Instruction.on(Cube.from_ends(100, 200, 100, 200, 100, 200))
        assert initialization_volume([far]) == 0
        assert reboot_volume([far]) == 101 ** 3

    def test_partial_steps_are_clipped(self):
        step = Instruction.on(Cube.from_ends(40, 60, 0, 0, 0, 0))
        assert initialization_volume([step]) == 11
        assert reboot_volume([step]) == 21

    def test_larger_example_matches_brute_force(self, larger_text):
        instructions = parse_instructions(larger_text)
        grid = DenseGrid.from_instructions(instructions, bounds=focus_cube(50))
        assert initialization_volume(instructions) == grid.count()

    def test_full_reboot_exceeds_focus(self, larger_text):
        instructions = parse_instructions(larger_text)
        assert reboot_volume(instructions) > initialization_volume(instructions)
