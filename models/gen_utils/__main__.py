"""python -m models.gen_utils 入口"""

import sys

from .generator_main import main

sys.exit(main())
