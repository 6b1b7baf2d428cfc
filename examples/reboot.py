import torch
from cuboid_reboot import *
from cuboid_reboot.dense import DenseGrid

text = """\
on x=-20..26,y=-36..17,z=-47..7
on x=-20..33,y=-21..23,z=-26..28
off x=-48..-32,y=26..41,z=-47..-37
on x=-12..35,y=6..50,z=-50..-2
off x=-40..-22,y=-38..-28,z=23..41
on x=-54112..-39298,y=-85059..-49293,z=-27449..7877
on x=967..23432,y=45373..81175,z=27513..53682
"""

instructions = parse_instructions(text)

# Initialization region only: every cube clipped to -50..50
print("initialization:", initialization_volume(instructions))

# Whole reboot, keeping the shape around
engine = RebootEngine(compact=True)
print("full reboot:", engine.run(instructions))
print("cubes kept:", len(engine.shape))

# Cross-check the clipped run against a dense simulation
grid = DenseGrid.from_instructions(instructions, bounds=focus_cube(50))
print("dense check:", grid.count())

# A slice through z = 0 of the initialization region
section = grid.cells[:, :, 50]
print("cells on at z=0:", int(torch.count_nonzero(section)))
