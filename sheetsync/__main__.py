import sys

from sheetsync.main import main

sys.exit(main())
