"""Interactive pruning of stale local git branches.

Features:
- Review local branches one at a time, oldest last commit first
- Keep, delete or quit with a single keypress
- Restore hint printed for every deleted branch
- The current branch and 'master' are never offered for deletion
"""

__version__ = "0.1.0"
