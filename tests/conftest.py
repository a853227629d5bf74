"""Pytest configuration shared by all tests"""

import os
import sys
import tempfile
from pathlib import Path

# Add project root to path for docsearch imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# docsearch.main configures file logging on import - keep it out of the repo
os.environ.setdefault("LOG_FILE", str(Path(tempfile.gettempdir()) / "docsearch-tests" / "docsearch.log"))
