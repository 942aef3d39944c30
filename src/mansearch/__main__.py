import sys

from mansearch.cli import main

sys.exit(main())
