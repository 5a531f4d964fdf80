"""
PSO Records Leaderboard - Core Package

This package contains the core modules for:
- Dataset loading (src.ingestion)
- The join/filter/group/render pipeline (src.leaderboard)
- UI-agnostic widgets (src.widgets)
- Shared configuration and utilities
"""

from src.config import *
