# -*- coding: utf-8 -*-
"""Errors raised while dumping glyphs. The CLI turns them into exit code 1."""

from __future__ import annotations


class DumpError(Exception):
    pass


class SourceUnreadable(DumpError):
    pass


class MalformedSource(DumpError):
    pass


class ConfigUnreadable(DumpError):
    pass


class OutputDirUncreatable(DumpError):
    pass


class GlyphWriteError(DumpError):
    pass


class EmptyDiff(DumpError):
    pass
