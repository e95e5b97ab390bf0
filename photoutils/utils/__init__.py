"""
Utility helpers: logging setup and filesystem probing.

Author: photoutils Project
License: MIT
"""
