#!/usr/bin/env python3
"""Deploy the website stacks and purge the CloudFront and Cloudflare caches.

Run from the project root (where cdk.json lives):

  uv run python scripts/deploy_website.py
"""

import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from deployer.cli import main  # noqa: E402

if __name__ == "__main__":
  main()
