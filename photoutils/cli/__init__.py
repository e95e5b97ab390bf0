"""
Command line front ends: pcopy and pclassify.

Author: photoutils Project
License: MIT
"""
