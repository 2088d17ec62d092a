"""Run with: python -m facetcrawl"""

import sys

from facetcrawl.cli import main

sys.exit(main())
