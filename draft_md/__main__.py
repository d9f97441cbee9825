import sys

from draft_md.main import main

sys.exit(main())
