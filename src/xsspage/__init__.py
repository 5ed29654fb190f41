"""xsspage: Interactive XSS teaching toolkit.

Payload mutation, DOM sink/source scanning and Content Security Policy
evaluation behind a CLI and a small JSON API.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
