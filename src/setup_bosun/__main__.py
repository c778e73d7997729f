import sys

from setup_bosun.setup_bosun_runner import main

sys.exit(main())
