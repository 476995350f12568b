#!/usr/bin/env python3
"""Run the sqsmover CLI from a source checkout.

Example:
    python scripts/sqs.py ls
    python scripts/sqs.py dump my-dlq --number 100 --delete false
    python scripts/sqs.py requeue my-queue ./my-dlq-2024-01-01.jsonl
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqsmover.cli import main

if __name__ == "__main__":
    sys.exit(main())
