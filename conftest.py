"""
Root-level conftest.py for Organizer tests.

Sets up the import path before any test collection occurs.
"""

import sys
from pathlib import Path

# Ensure project root is on sys.path for all test imports
_project_root = str(Path(__file__).parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)
