import sys

from huffpack.cli import main

sys.exit(main())
