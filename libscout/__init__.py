"""
libscout - Resource knowledge index for shared front-end libraries.

libscout walks a shared library's source tree (components, utilities,
configuration modules, plugins and example projects), pulls structured
metadata out of it with lightweight text heuristics, and answers
lookups with exact, category-scoped and fuzzy matching.

Ask me where the avatar component lives. I already know. I just
need a second to read the whole library first.
"""

import logging

__version__ = "1.0.0"
__author__ = "libscout Contributors"

logging.getLogger(__name__).addHandler(logging.NullHandler())
