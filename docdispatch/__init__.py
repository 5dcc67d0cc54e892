"""Documentation change dispatcher.

Matches the files changed in the latest commit against configured
documentation jobs and notifies a GitHub repository about each job that
needs regenerating.
"""

__version__ = "1.0.0"
