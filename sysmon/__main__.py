import sys

from sysmon.cli.cli import main

sys.exit(main())
