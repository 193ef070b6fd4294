"""Root conftest.py - make the project importable when running pytest from a checkout."""

import os
import sys

project_root = os.path.dirname(os.path.abspath(__file__))

# Add project root to sys.path so `videotools` is importable without installing
if project_root not in sys.path:
    sys.path.insert(0, project_root)
