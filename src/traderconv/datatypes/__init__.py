# -*- coding: utf-8 -*-
"""Data types of the TraderPlus v2 schema and of the legacy dialects."""
