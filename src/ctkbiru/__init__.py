from __future__ import annotations

"""
ctkbiru: keep directory blueprints in a per-user store and generate
directory trees from them.
"""

__version__ = "0.1.0"
