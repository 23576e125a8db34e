import sys

from battlepass_tracker.cli import main

sys.exit(main())
