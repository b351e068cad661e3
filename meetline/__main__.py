import sys

from meetline.app.main import main

sys.exit(main())
