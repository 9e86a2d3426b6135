# -*- coding: utf-8 -*-
"""Dump SVG fonts and Fontello configs to one SVG file per glyph."""

__version__ = "1.0.0"
