"""
Test suite for the Value Pipeline.

This package contains unit and integration tests for the Producer,
Processor and Consumer services, their shared client and the poller.
"""

import sys
from pathlib import Path

# Add the project root to Python path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
