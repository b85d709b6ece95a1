import sys

from code_guard.cli import main

sys.exit(main())
