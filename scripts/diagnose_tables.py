#!/usr/bin/env python3
"""Check the configured Supabase project for the tables BookSwap needs."""

import asyncio
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from bookswap.config import get_settings
from bookswap.main import run_diagnose


if __name__ == '__main__':
    sys.exit(asyncio.run(run_diagnose(get_settings())))
