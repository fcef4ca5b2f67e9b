import sys

from trellobot.cli import main

sys.exit(main())
