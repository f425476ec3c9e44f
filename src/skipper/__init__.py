"""
Skipper Package

Keeps node names unique across marked (skipped) levels of a content tree.

Marked nodes are left out of published URLs, so their children share a
naming space with the children of other marked nodes in the same scope.
Before a node is saved, this package finds same-named peers in that scope
and appends a " (n) " suffix to the saved name.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - How the host stores nodes
    - How the host renders URLs
    - How the host persists changes

The host supplies a ContentTree and calls SavingHandler.handle().
"""

__version__ = "0.1.0"
