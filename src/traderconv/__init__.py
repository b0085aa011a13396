# -*- coding: utf-8 -*-
"""Converts legacy TraderX and TraderPlus configurations into TraderPlus v2 files."""
