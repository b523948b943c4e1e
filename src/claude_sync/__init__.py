"""claude-sync: fragment reconciliation and profile overlays for a synced config mirror."""

__version__ = "0.4.0"
