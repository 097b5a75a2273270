"""Console script ``email-notif`` with production wiring.

Lives outside ``adapters`` so the CLI never imports the composition root.
"""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run the CLI against the real configuration, SMTP and logging adapters."""
    return cli_main(services_factory=build_production)


__all__ = ["main"]
