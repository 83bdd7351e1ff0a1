"""Allow ``python -m chronoface``."""

from chronoface import main

main()
