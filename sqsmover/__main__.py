import sys

from sqsmover.cli import main

sys.exit(main())
