# Configuration package initialization
"""
EQ Log Tools - Configuration System

This package provides a lightweight configuration system for the EQ Log Tools.

Quick Usage:
    from config import Config

    config = Config()
    value = config.get('export.delimiter')

    # Or load a named profile from profiles/<name>.json
    custom_config = Config(profile='raid_night')
"""

from config.config import Config

__all__ = ['Config']
