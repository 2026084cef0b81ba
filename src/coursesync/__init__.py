"""Course content synchronization engine.

Reconciles instructor-authored course content on a local working tree with a
remote git repository and exposes pull, push and history operations.
"""

__version__ = "0.1.0"
