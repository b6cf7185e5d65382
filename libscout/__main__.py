import sys

from libscout.cli import main

sys.exit(main())
