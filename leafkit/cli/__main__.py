import sys

from leafkit.cli import main

sys.exit(main())
