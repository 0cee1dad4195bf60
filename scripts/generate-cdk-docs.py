#!/usr/bin/env python3
"""
Convert jsii assembly manifests into Docusaurus-compatible markdown pages.

Usage:
    python3 scripts/generate-cdk-docs.py path/to/.jsii [...] -o docs/reference
"""

import sys

from cdk_docs.generate import main

if __name__ == "__main__":
    sys.exit(main())
