#!/usr/bin/env python
"""Production launcher: reload disabled, console logging at INFO."""

import os

os.environ["DRAGBOARD_RELOAD"] = "0"

from dragboard import main

if __name__ in {"__main__", "__mp_main__"}:
    main()
