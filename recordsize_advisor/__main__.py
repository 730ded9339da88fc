import sys

from recordsize_advisor.cli import main

sys.exit(main())
