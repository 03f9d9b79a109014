import sys

from constenum.compiler.cli import main

sys.exit(main())
