import sys

from flux_mcp.api.server import main

sys.exit(main())
