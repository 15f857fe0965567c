import sys

from skyboard.cli import main

sys.exit(main())
