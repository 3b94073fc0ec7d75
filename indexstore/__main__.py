import sys

from indexstore.cli.driver_cli import main

sys.exit(main())
