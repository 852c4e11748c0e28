import sys

from lightbox.main import main

sys.exit(main())
