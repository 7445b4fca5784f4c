import sys
from jnotes.cli import main

sys.exit(main())
