import sys

from congress_uniqueness.cli import main

sys.exit(main())
