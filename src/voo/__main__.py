import sys

from voo.cli import main

sys.exit(main())
