"""
Utils module for VueLocalizer
=============================
"""

from .config import ConfigManager, ExtractorSettings, OutputSettings
from .encoding import read_text_safely

__all__ = [
    'ConfigManager', 'ExtractorSettings', 'OutputSettings', 'read_text_safely'
]
