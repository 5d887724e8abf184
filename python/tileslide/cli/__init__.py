from tileslide.cli.app import app

__all__ = ["app"]
