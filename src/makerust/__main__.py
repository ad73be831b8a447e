import sys

from makerust.cli import main

sys.exit(main())
