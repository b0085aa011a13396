# -*- coding: utf-8 -*-
"""Readers for the legacy configuration dialects."""
