import sys

from envgen.cli import main

sys.exit(main())
