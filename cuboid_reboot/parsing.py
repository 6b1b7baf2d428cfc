"""Text parsing for reboot instructions.

One instruction per line, for example::

    on x=10..12,y=10..12,z=10..12
    off x=9..11,y=9..11,z=9..11

Range ends may be given in either order. Blank lines are skipped.
"""

import logging
import re
from pathlib import Path
from typing import Iterator

from cuboid_reboot.cube import Cube
from cuboid_reboot.engine import Instruction, OnOff
from cuboid_reboot.errors import ParseError, RebootError
from cuboid_reboot.segment import Segment

_INT = r"(-?\d+)"
_RANGE = _INT + r"\.\." + _INT
INSTRUCTION_PATTERN = re.compile(
    r"^\s*(on|off)\s+x=" + _RANGE + r",y=" + _RANGE + r",z=" + _RANGE + r"\s*$"
)

logger = logging.getLogger(__name__)


def parse_instruction(line: str, line_number: int | None = None) -> Instruction:
    """Parse a single instruction line.

    Args:
        line: Text such as ``on x=-20..26,y=-36..17,z=-47..7``
        line_number: Optional 1-based line number reported in errors

    Returns:
        Instruction

    Raises:
        ParseError: If the line does not match the instruction grammar or
                    a coordinate is out of range
    """
    match = INSTRUCTION_PATTERN.match(line)
    if match is None:
        raise ParseError(f"Malformed instruction {line.strip()!r}", line_number, line)
    state, *ends = match.groups()
    try:
        segments = [Segment.from_ends(int(ends[i]), int(ends[i + 1])) for i in range(0, 6, 2)]
    except RebootError as exc:
        raise ParseError(str(exc), line_number, line) from exc
    return Instruction(OnOff(state), Cube(*segments))

def iter_instructions(text: str) -> Iterator[Instruction]:
    """Lazily parse every non-blank line of ``text``."""
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        yield parse_instruction(line, line_number)

def parse_instructions(text: str) -> list[Instruction]:
    """Parse every non-blank line of ``text`` into a list of instructions."""
    instructions = list(iter_instructions(text))
    logger.debug(f"Parsed {len(instructions)} instruction(s)")
    return instructions

def load_instructions(path: str | Path) -> list[Instruction]:
    """Read and parse an instruction file."""
    path = Path(path)
    logger.debug(f"Loading instructions from {path}")
    return parse_instructions(path.read_text(encoding="utf-8"))

def format_instructions(instructions) -> str:
    """Render instructions back into the line format accepted by the parser."""
    return "\n".join(str(step) for step in instructions)
