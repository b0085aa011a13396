# -*- coding: utf-8 -*-
"""Release metadata."""

EXECUTABLE_VERSION = "0.1.0"
