"""
Entry point for running the Media Stream System as a module.
"""

from .main import main

if __name__ == "__main__":
    main()
