"""
exprcalc entry point.

Run with: python -m exprcalc eval "555/5 + 1 - 100"
"""

from exprcalc.cli import main

if __name__ == "__main__":
    main()
