import sys

from viewtour.cli import main

sys.exit(main())
