import sys

from bossfight.cli import main

sys.exit(main())
