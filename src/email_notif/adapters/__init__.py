"""Adapters layer - infrastructure and framework integrations.

Contains adapter implementations that connect the application to external
systems and frameworks.

Contents:
    * :mod:`.config` - Layered configuration loading, overrides and display
    * :mod:`.email` - Email settings and SMTP delivery
    * :mod:`.memory` - In-memory port implementations for tests
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
