"""``template-mailer`` console script.

The CLI adapters never import the composition root themselves; this module
hands them ``build_production`` so sends go to SendGrid.
"""

from __future__ import annotations

from .adapters.cli.main import main as run_cli
from .composition import build_production


def main() -> int:
    """Run the CLI against SendGrid and the configured template catalog."""
    return run_cli(services_factory=build_production)


__all__ = ["main"]
