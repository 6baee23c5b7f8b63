"""segconv context for passing state between commands."""

from typing import Optional

import click

from .config import Settings, load_settings


class SegconvContext:
    def __init__(self):
        self.settings: Optional[Settings] = None

    def get_settings(self) -> Settings:
        """Settings resolved by the group, or fresh ones for bare commands."""
        if self.settings is None:
            self.settings = load_settings()
        return self.settings


pass_context = click.make_pass_decorator(SegconvContext, ensure=True)
