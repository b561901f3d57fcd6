import sys

from manifest_compiler.cli import main

sys.exit(main())
