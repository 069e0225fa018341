import sys

from devtools_cli.main import main

sys.exit(main())
