import sys

from tasktrack.main import main

sys.exit(main())
