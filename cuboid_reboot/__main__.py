import sys

from cuboid_reboot.cli import main

sys.exit(main())
