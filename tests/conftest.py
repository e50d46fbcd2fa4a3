"""Shared test configuration.

Selects the ``test`` configuration environment before any application
module reads settings.
"""

import os


os.environ["APP_ENV"] = "test"
